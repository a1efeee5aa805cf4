"""Base interfaces for the persistent and secure backing stores."""

from abc import ABC, abstractmethod
from typing import Any


class PersistentKeyValueStore(ABC):
    """Abstract base class for disk-backed preference stores.

    A preference store keeps a small set of native value kinds (str, bool,
    int, float and list of str) under string keys. Typed getters return
    ``None`` when the key is missing or holds a different kind.

    Example:
        >>> store = await JsonFilePreferenceStore.get_instance(path)
        >>> await store.set_int("launches", 3)
        >>> await store.get_int("launches")
        3
    """

    @classmethod
    @abstractmethod
    async def get_instance(cls, *args: Any, **kwargs: Any) -> "PersistentKeyValueStore":
        """Open the store, loading any persisted state.

        Returns:
            A ready-to-use store
        """
        pass

    @abstractmethod
    async def contains_key(self, key: str) -> bool:
        """Check whether a key holds a value of any kind."""
        pass

    @abstractmethod
    async def get_string(self, key: str) -> str | None:
        pass

    @abstractmethod
    async def get_bool(self, key: str) -> bool | None:
        pass

    @abstractmethod
    async def get_int(self, key: str) -> int | None:
        pass

    @abstractmethod
    async def get_double(self, key: str) -> float | None:
        pass

    @abstractmethod
    async def get_string_list(self, key: str) -> list[str] | None:
        pass

    @abstractmethod
    async def set_string(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def set_bool(self, key: str, value: bool) -> None:
        pass

    @abstractmethod
    async def set_int(self, key: str, value: int) -> None:
        pass

    @abstractmethod
    async def set_double(self, key: str, value: float) -> None:
        pass

    @abstractmethod
    async def set_string_list(self, key: str, value: list[str]) -> None:
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Remove a key. No-op if the key does not exist."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key in the store."""
        pass


class SecureKeyValueStore(ABC):
    """Abstract base class for string-only encrypted stores."""

    @abstractmethod
    async def contains_key(self, key: str) -> bool:
        pass

    @abstractmethod
    async def read(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Key to read

        Returns:
            Stored string or None if not found
        """
        pass

    @abstractmethod
    async def write(self, key: str, value: str) -> None:
        """Store a string value, replacing any previous one."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a key. No-op if the key does not exist."""
        pass

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every key in the store."""
        pass
