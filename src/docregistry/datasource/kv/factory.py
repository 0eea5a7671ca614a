from typing import Any, Type

from loguru import logger

from docregistry.config.settings import Settings
from docregistry.datasource.kv.base import BaseKVStore
from docregistry.datasource.kv.in_memory import InMemoryKV
from docregistry.datasource.kv.sqlite import SQLiteKV


class KVStoreFactory:
    """
    Factory for creating Key-Value Store instances based on type.
    """

    _registry: dict[str, Type[BaseKVStore]] = {
        "memory": InMemoryKV,
        "sqlite": SQLiteKV,
    }

    @classmethod
    def create(cls, type_name: str, **params: Any) -> BaseKVStore:
        """
        Create a key-value store instance.

        Args:
            type_name: Type identifier ("memory" or "sqlite")
            **params: Backend-specific constructor parameters
        """
        if not type_name:
            type_name = "memory"

        if type_name not in cls._registry:
            available = ", ".join(cls.available_types())
            raise ValueError(f"Unknown KV Store Type: '{type_name}'. Available types: {available}")

        kv_class = cls._registry[type_name]
        logger.debug(f"Creating {kv_class.__name__} with params: {params}")
        return kv_class(**params)

    @classmethod
    def from_settings(cls, settings: Settings) -> BaseKVStore:
        """Build the backend selected by STORE_BACKEND."""
        if settings.STORE_BACKEND == "sqlite":
            return cls.create(
                "sqlite",
                db_path=settings.SQLITE_PATH,
                table_name=settings.SQLITE_TABLE,
            )
        return cls.create(settings.STORE_BACKEND)

    @classmethod
    def available_types(cls) -> list[str]:
        return list(cls._registry.keys())
