"""Abstract key/value storage interface."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class Storage(ABC):
    """Abstract string key/value store for moneyjar state documents."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def set_many(self, values: Mapping[str, str]) -> None:
        """Store several keys at once. Either all values are written or none."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key if present."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass
