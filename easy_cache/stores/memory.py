"""Process-local implementations of the backing store interfaces.

Useful in tests and wherever the facade should run without touching disk.
Both stores copy list values on the way in and out, so callers never share
mutable state with the store.
"""

from typing import Any, Callable

from easy_cache.stores.base import PersistentKeyValueStore, SecureKeyValueStore


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


class InMemoryPreferenceStore(PersistentKeyValueStore):
    """Preference store held in a dict.

    Subclasses persist state by overriding :meth:`_persist`, which is awaited
    after every mutation.
    """

    def __init__(self, initial_values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = {}
        for key, value in (initial_values or {}).items():
            self._values[key] = list(value) if isinstance(value, list) else value

    @classmethod
    async def get_instance(
        cls, initial_values: dict[str, Any] | None = None
    ) -> "InMemoryPreferenceStore":
        return cls(initial_values)

    async def _persist(self) -> None:
        pass

    def _get(self, key: str, check: Callable[[Any], bool]) -> Any:
        value = self._values.get(key)
        if value is None or not check(value):
            return None
        return value

    async def contains_key(self, key: str) -> bool:
        return key in self._values

    async def get_string(self, key: str) -> str | None:
        return self._get(key, lambda v: isinstance(v, str))

    async def get_bool(self, key: str) -> bool | None:
        return self._get(key, lambda v: isinstance(v, bool))

    async def get_int(self, key: str) -> int | None:
        return self._get(key, lambda v: isinstance(v, int) and not isinstance(v, bool))

    async def get_double(self, key: str) -> float | None:
        return self._get(key, lambda v: isinstance(v, float))

    async def get_string_list(self, key: str) -> list[str] | None:
        value = self._get(key, _is_string_list)
        return list(value) if value is not None else None

    async def _set(self, key: str, value: Any) -> None:
        self._values[key] = value
        await self._persist()

    async def set_string(self, key: str, value: str) -> None:
        await self._set(key, value)

    async def set_bool(self, key: str, value: bool) -> None:
        await self._set(key, value)

    async def set_int(self, key: str, value: int) -> None:
        await self._set(key, value)

    async def set_double(self, key: str, value: float) -> None:
        await self._set(key, value)

    async def set_string_list(self, key: str, value: list[str]) -> None:
        await self._set(key, list(value))

    async def remove(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            await self._persist()

    async def clear(self) -> None:
        self._values.clear()
        await self._persist()

    def snapshot(self) -> dict[str, Any]:
        """Return a shallow copy of the stored values."""
        return dict(self._values)


class InMemorySecureStore(SecureKeyValueStore):
    """String-only secure store held in a dict. Nothing is encrypted."""

    def __init__(self, initial_values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial_values or {})

    async def _persist(self) -> None:
        pass

    async def contains_key(self, key: str) -> bool:
        return key in self._values

    async def read(self, key: str) -> str | None:
        return self._values.get(key)

    async def write(self, key: str, value: str) -> None:
        self._values[key] = value
        await self._persist()

    async def delete(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            await self._persist()

    async def delete_all(self) -> None:
        self._values.clear()
        await self._persist()

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the stored strings."""
        return dict(self._values)
