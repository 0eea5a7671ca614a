"""
DocRegistry - a minimal document registry.

One DocumentStore owns an ordered key-value map of documents keyed by a
generated identifier, and supports insert, list, substring search by name,
get, update and delete.
"""

__version__ = "0.1.0"

# Configuration
from .config.settings import Settings, load_settings

# Storage primitives
from .datasource.kv import BaseKVStore, InMemoryKV, KVStoreFactory, SQLiteKV

# Core entities
from .entities.document import Document

# Errors
from .errors import (
    DocRegistryError,
    InternalError,
    InvalidIdError,
    InvalidKeywordError,
    InvalidPayloadError,
    NotFoundError,
    ValidationError,
)

# Store
from .store import DocumentStore, new_document_id

__all__ = [
    # Version
    "__version__",
    # Core
    "Document",
    "DocumentStore",
    "new_document_id",
    # Storage
    "BaseKVStore",
    "InMemoryKV",
    "SQLiteKV",
    "KVStoreFactory",
    # Config
    "Settings",
    "load_settings",
    # Errors
    "DocRegistryError",
    "ValidationError",
    "InvalidPayloadError",
    "InvalidKeywordError",
    "InvalidIdError",
    "NotFoundError",
    "InternalError",
]
