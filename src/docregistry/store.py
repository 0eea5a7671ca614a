"""DocumentStore - the single component owning all document data.

The store wraps one ordered key-value map keyed by a generated identifier.
Documents are kept as JSON text, so values handed to callers are always
fresh copies and never alias stored state.

Example:
    >>> store = DocumentStore()
    >>> doc = store.add_document("Invoice", "Q1 report")
    >>> [d.id for d in store.find_documents("Inv")] == [doc.id]
    True
    >>> store.delete_document(doc.id).name
    'Invoice'
"""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any
from uuid import uuid4

from loguru import logger

from .config.settings import Settings
from .datasource.kv import BaseKVStore, InMemoryKV, KVStoreFactory
from .entities.document import Document, utc_now
from .errors import (
    DocRegistryError,
    InternalError,
    InvalidIdError,
    InvalidKeywordError,
    InvalidPayloadError,
    NotFoundError,
    wrap_exception,
)


def new_document_id() -> str:
    """128-bit random identifier rendered as 32 hex characters."""
    return uuid4().hex


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _require_text(field: str, value: Any) -> str:
    if value is None:
        raise InvalidPayloadError(f"Field '{field}' is required", details={"field": field})
    if _is_blank(value):
        raise InvalidPayloadError(
            f"Field '{field}' must be a non-empty string", details={"field": field}
        )
    return value


def _require_id(doc_id: Any) -> str:
    if _is_blank(doc_id):
        raise InvalidIdError(details={"id": doc_id if isinstance(doc_id, str) else None})
    return doc_id


class DocumentStore:
    """Single-writer document store over an ordered key-value map.

    Every operation runs under one re-entrant lock, so writes are serialized
    and reads copy a consistent snapshot of the map.

    Args:
        kv: Backing map. Defaults to a fresh ``InMemoryKV``.
        require_description: Reject documents without a description.
        id_factory: Produces new identifiers. Defaults to ``new_document_id``.
        clock: Produces timestamps. Defaults to the current UTC time.
    """

    def __init__(
        self,
        kv: BaseKVStore | None = None,
        *,
        require_description: bool = False,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._kv = kv if kv is not None else InMemoryKV()
        self.require_description = require_description
        self._id_factory = id_factory or new_document_id
        self._clock = clock or utc_now
        self._lock = threading.RLock()

        logger.info(
            f"DocumentStore initialized (backend={type(self._kv).__name__}, "
            f"require_description={require_description})"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> DocumentStore:
        """Build a store with the backend and validation rules in ``settings``."""
        return cls(
            KVStoreFactory.from_settings(settings),
            require_description=settings.REQUIRE_DESCRIPTION,
        )

    @property
    def kv(self) -> BaseKVStore:
        return self._kv

    @contextlib.contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Serialize the operation and turn storage failures into InternalError."""
        with self._lock:
            try:
                yield
            except DocRegistryError:
                raise
            except Exception as e:
                logger.error(f"{operation} failed: {type(e).__name__}: {e}")
                raise wrap_exception(e, context=operation) from e

    def _load(self, doc_id: str) -> Document:
        raw = self._kv.get(doc_id)
        if raw is None:
            raise NotFoundError(f"Document '{doc_id}' not found", details={"id": doc_id})
        return Document.from_json(raw)

    def _validate_description(self, description: Any) -> str | None:
        if description is None and not self.require_description:
            return None
        return _require_text("description", description)

    # ==================== Operations ====================

    def add_document(self, name: Any, description: Any = None) -> Document:
        """Create a document and return it with its generated id.

        Raises:
            InvalidPayloadError: ``name`` (or a required/given ``description``)
                is missing or empty.
            InternalError: the generated id already exists, or storage failed.
        """
        name = _require_text("name", name)
        description = self._validate_description(description)

        with self._guard("add_document"):
            doc_id = self._id_factory()
            if self._kv.contains(doc_id):
                raise InternalError(
                    f"Generated id '{doc_id}' collides with an existing document",
                    details={"id": doc_id},
                )

            doc = Document(
                id=doc_id,
                name=name,
                description=description,
                created_at=self._clock(),
            )
            self._kv.set(doc_id, doc.to_json())

        logger.info(f"Added document '{doc_id}' (name={name!r})")
        return doc

    def get_documents(self) -> list[Document]:
        """All documents in insertion order."""
        with self._guard("get_documents"):
            docs = [Document.from_json(raw) for raw in self._kv.values()]
        logger.debug(f"Listed {len(docs)} documents")
        return docs

    def find_documents(self, keyword: Any) -> list[Document]:
        """Documents whose name contains ``keyword`` (case-sensitive).

        Raises:
            InvalidKeywordError: ``keyword`` is empty or not a string.
        """
        if _is_blank(keyword):
            raise InvalidKeywordError(details={"keyword": keyword if isinstance(keyword, str) else None})

        with self._guard("find_documents"):
            matches = [
                doc
                for doc in (Document.from_json(raw) for raw in self._kv.values())
                if keyword in doc.name
            ]
        logger.debug(f"Search for {keyword!r} matched {len(matches)} documents")
        return matches

    def get_document(self, doc_id: Any) -> Document:
        """Fetch one document by id.

        Raises:
            InvalidIdError: ``doc_id`` is empty or not a string.
            NotFoundError: no document has this id.
        """
        doc_id = _require_id(doc_id)
        with self._guard("get_document"):
            return self._load(doc_id)

    def update_document(
        self,
        doc_id: Any,
        name: Any = None,
        description: Any = None,
    ) -> Document:
        """Replace the given fields and stamp ``updated_at``.

        ``id``, ``created_at`` and the document's position never change.

        Raises:
            InvalidIdError, NotFoundError: as for ``get_document``.
            InvalidPayloadError: no field given, or a given field is empty.
        """
        doc_id = _require_id(doc_id)
        if name is None and description is None:
            raise InvalidPayloadError(
                "Nothing to update: provide 'name' and/or 'description'",
                details={"id": doc_id},
            )
        if name is not None:
            _require_text("name", name)
        if description is not None:
            _require_text("description", description)

        with self._guard("update_document"):
            doc = self._load(doc_id)
            changes: dict[str, Any] = {"updated_at": self._clock()}
            if name is not None:
                changes["name"] = name
            if description is not None:
                changes["description"] = description
            updated = doc.model_copy(update=changes)
            self._kv.set(doc_id, updated.to_json())

        logger.info(f"Updated document '{doc_id}' ({', '.join(sorted(changes))})")
        return updated

    def delete_document(self, doc_id: Any) -> Document:
        """Remove a document and return it.

        Raises:
            InvalidIdError: ``doc_id`` is empty or not a string.
            NotFoundError: no document has this id.
        """
        doc_id = _require_id(doc_id)
        with self._guard("delete_document"):
            doc = self._load(doc_id)
            self._kv.delete([doc_id])

        logger.info(f"Deleted document '{doc_id}'")
        return doc

    def count(self) -> int:
        with self._guard("count"):
            return len(self._kv)

    def close(self) -> None:
        with self._lock:
            self._kv.close()

    def __len__(self) -> int:
        return self.count()

    def __enter__(self) -> DocumentStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
