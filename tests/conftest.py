"""Pytest configuration and global fixtures for DocRegistry tests."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from docregistry.datasource.kv import InMemoryKV, SQLiteKV
from docregistry.store import DocumentStore


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"doc-{next(counter)}"


@pytest.fixture
def store(clock):
    s = DocumentStore(InMemoryKV(), clock=clock)
    yield s
    s.close()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "registry.db")


@pytest.fixture
def sqlite_store(db_path, clock):
    s = DocumentStore(SQLiteKV(db_path=db_path, table_name="documents"), clock=clock)
    yield s
    s.close()


@pytest.fixture
def sample_documents() -> list[tuple[str, str]]:
    return [
        ("Invoice", "Q1 report"),
        ("Invoice draft", "Q2 report"),
        ("Contract", "Supplier agreement"),
        ("invoice archive", "Lowercase name"),
    ]
