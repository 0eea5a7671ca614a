from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple


class BaseKVStore(ABC):
    """
    Abstract Base Class for ordered Key-Value Stores.

    Keys are strings. Iteration follows insertion order; overwriting an
    existing key keeps its original position.
    """

    @abstractmethod
    def mget(self, keys: List[str]) -> List[Optional[Any]]:
        """Get multiple values."""
        pass

    @abstractmethod
    def mset(self, data: dict[str, Any]) -> None:
        """Set multiple values."""
        pass

    @abstractmethod
    def delete(self, keys: List[str]) -> None:
        """Delete multiple keys."""
        pass

    @abstractmethod
    def items(self) -> List[Tuple[str, Any]]:
        """All (key, value) pairs in insertion order."""
        pass

    def get(self, key: str) -> Optional[Any]:
        """Get single value."""
        results = self.mget([key])
        return results[0] if results else None

    def set(self, key: str, value: Any) -> None:
        """Set single value."""
        self.mset({key: value})

    def keys(self) -> List[str]:
        return [k for k, _ in self.items()]

    def values(self) -> List[Any]:
        return [v for _, v in self.items()]

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def close(self) -> None:
        """Release resources held by the store."""
        pass

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self.items())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
