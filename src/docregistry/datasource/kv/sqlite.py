"""
SQLite-based ordered Key-Value Store.

This module provides the durable map behind the document store. Rows carry
an autoincrement sequence number so that iteration follows insertion order,
and upserts keep the original sequence number of an existing key.

Features:
- Thread-safe operations with locking
- Connection reuse for better performance
- Every write is committed before the call returns
- Context manager support for proper resource cleanup

Example:
    Using context manager (recommended):

    >>> with SQLiteKV(db_path="./kv.db") as kv:
    ...     kv.mset({"key1": "value1", "key2": "value2"})
    ...     values = kv.mget(["key1", "key2"])
    >>> # Connection automatically closed
"""

import contextlib
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any

from .base import BaseKVStore

logger = logging.getLogger(__name__)


class SQLiteKV(BaseKVStore):
    """
    Persistent ordered Key-Value Store using SQLite.

    Attributes:
        db_path: Path to the SQLite database file
        table_name: Name of the table storing key-value pairs
        timeout: Connection timeout in seconds (default: 30.0)
    """

    def __init__(
        self,
        db_path: str = "kv_store.db",
        table_name: str = "kv_store",
        timeout: float = 30.0
    ):
        """
        Initialize SQLite key-value store.

        Args:
            db_path: Path to SQLite database file. Parent directories are
                     created when missing.
            table_name: Table name for key-value storage
            timeout: Connection timeout in seconds (default: 30.0)
        """
        if not table_name.isidentifier():
            raise ValueError(f"Invalid table name: {table_name!r}")

        self.db_path = str(db_path)
        self.table_name = table_name
        # Quoted so reserved words such as "order" are usable as names
        self._table = f'"{table_name}"'
        self.timeout = timeout
        self._lock = threading.RLock()
        self._closed = False

        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connection = sqlite3.connect(
            self.db_path,
            timeout=self.timeout,
            check_same_thread=False  # Access is serialized by our lock
        )
        self._connection.execute("PRAGMA journal_mode=WAL")

        self._init_db()
        logger.debug(f"SQLiteKV initialized: {self.db_path}, table={table_name}")

    def _init_db(self) -> None:
        """Initialize the database table if it doesn't exist."""
        with self._lock:
            self._connection.execute(f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL UNIQUE,
                    value TEXT
                )
            """)
            self._connection.commit()

    def _check_closed(self) -> None:
        """Raise an error if the connection has been closed."""
        if self._closed:
            raise RuntimeError(
                "Cannot perform operation: SQLiteKV connection has been closed. "
                "Create a new SQLiteKV instance to continue."
            )

    def mget(self, keys: list[str]) -> list[Any | None]:
        """
        Get multiple values by keys.

        Returns:
            List of values in the same order as keys.
            None for keys that don't exist.
        """
        self._check_closed()
        if not keys:
            return []

        placeholders = ",".join("?" * len(keys))
        query = f"SELECT key, value FROM {self._table} WHERE key IN ({placeholders})"

        with self._lock:
            cursor = self._connection.execute(query, keys)
            results_map = dict(cursor.fetchall())

        return [results_map.get(k) for k in keys]

    def mset(self, data: dict[str, Any]) -> None:
        """
        Set multiple key-value pairs.

        Values are converted to strings. Existing keys keep their position.
        """
        self._check_closed()
        if not data:
            return

        query = (
            f"INSERT INTO {self._table} (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value"
        )
        params = [(k, str(v)) for k, v in data.items()]

        with self._lock:
            self._connection.executemany(query, params)
            self._connection.commit()

    def delete(self, keys: list[str]) -> None:
        """Delete multiple keys."""
        self._check_closed()
        if not keys:
            return

        placeholders = ",".join("?" * len(keys))
        query = f"DELETE FROM {self._table} WHERE key IN ({placeholders})"

        with self._lock:
            self._connection.execute(query, keys)
            self._connection.commit()

    def items(self) -> list[tuple[str, Any]]:
        """All (key, value) pairs ordered by insertion."""
        self._check_closed()
        with self._lock:
            cursor = self._connection.execute(
                f"SELECT key, value FROM {self._table} ORDER BY seq"
            )
            return [(k, v) for k, v in cursor.fetchall()]

    def contains(self, key: str) -> bool:
        self._check_closed()
        with self._lock:
            cursor = self._connection.execute(
                f"SELECT 1 FROM {self._table} WHERE key = ?", (key,)
            )
            return cursor.fetchone() is not None

    def __len__(self) -> int:
        self._check_closed()
        with self._lock:
            cursor = self._connection.execute(f"SELECT COUNT(*) FROM {self._table}")
            return cursor.fetchone()[0]

    def close(self) -> None:
        """
        Close the database connection.

        Note:
            After calling close(), the store instance cannot be used.
            Any subsequent operations will raise RuntimeError.
        """
        if self._closed:
            return

        with self._lock:
            try:
                self._connection.close()
                logger.debug(f"SQLiteKV connection closed: {self.db_path}")
            except Exception as e:
                logger.warning(f"Error closing SQLiteKV connection: {e}")
            finally:
                self._closed = True

    def __enter__(self) -> "SQLiteKV":
        return self

    def __del__(self):
        # Note: __del__ is not guaranteed to be called
        if not getattr(self, "_closed", True):
            with contextlib.suppress(Exception):
                self.close()
