from .base import BaseKVStore
from .factory import KVStoreFactory
from .in_memory import InMemoryKV
from .sqlite import SQLiteKV

__all__ = ["BaseKVStore", "InMemoryKV", "SQLiteKV", "KVStoreFactory"]
