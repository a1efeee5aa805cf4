"""Per-backend conversion of supported values.

The memory backend keeps values as-is. The persistent backend maps
primitives and string lists onto the store's native setters and JSON-encodes
maps (a list of maps becomes a list of independently encoded JSON strings).
The secure backend is string-only, so every value is encoded to a string.

Decoders return ``None`` when a value is present but has the wrong shape for
the requested type. Malformed JSON is not a miss: ``json.JSONDecodeError``
propagates to the caller.
"""

import json
from typing import Any

from easy_cache.core.exceptions import UnsupportedTypeError
from easy_cache.core.models import SupportedType
from easy_cache.core.validation import matches
from easy_cache.stores.base import PersistentKeyValueStore


def _parse_number(raw: str, kind: type) -> int | float | None:
    """Parse a stored number, or return None.

    Surrounding whitespace is ignored. Digit group underscores, which Python
    literals allow, are not.
    """
    if "_" in raw:
        return None
    try:
        return kind(raw)
    except ValueError:
        return None


class MemoryCodec:
    """Identity codec; structured values are stored by reference."""

    def encode(self, value: Any, supported_type: SupportedType) -> Any:
        return value

    def decode(self, raw: Any, supported_type: SupportedType) -> Any | None:
        return raw if matches(supported_type, raw) else None


class PersistentCodec:
    """Reads and writes values through a preference store's typed accessors."""

    async def write(
        self,
        store: PersistentKeyValueStore,
        key: str,
        value: Any,
        supported_type: SupportedType,
    ) -> None:
        """Store ``value`` using the setter that fits its type.

        Args:
            store: Open preference store
            key: Cache key
            value: Value already validated against ``supported_type``
            supported_type: Type of ``value``
        """
        if supported_type is SupportedType.STRING:
            await store.set_string(key, value)
        elif supported_type is SupportedType.BOOL:
            await store.set_bool(key, value)
        elif supported_type is SupportedType.INT:
            await store.set_int(key, value)
        elif supported_type is SupportedType.DOUBLE:
            await store.set_double(key, value)
        elif supported_type is SupportedType.STRING_LIST:
            await store.set_string_list(key, value)
        elif supported_type is SupportedType.STRING_KEYED_MAP:
            await store.set_string(key, json.dumps(value))
        elif supported_type is SupportedType.LIST_OF_STRING_KEYED_MAP:
            await store.set_string_list(key, [json.dumps(item) for item in value])
        else:
            raise UnsupportedTypeError(supported_type, key=key)

    async def read(
        self,
        store: PersistentKeyValueStore,
        key: str,
        supported_type: SupportedType,
    ) -> Any | None:
        """Read ``key`` as ``supported_type``.

        Returns:
            Decoded value, or None if missing or stored as another kind

        Raises:
            json.JSONDecodeError: If a structured value is not valid JSON
        """
        if supported_type is SupportedType.STRING:
            return await store.get_string(key)
        if supported_type is SupportedType.BOOL:
            return await store.get_bool(key)
        if supported_type is SupportedType.INT:
            return await store.get_int(key)
        if supported_type is SupportedType.DOUBLE:
            return await store.get_double(key)
        if supported_type is SupportedType.STRING_LIST:
            return await store.get_string_list(key)
        if supported_type is SupportedType.STRING_KEYED_MAP:
            raw = await store.get_string(key)
            decoded = json.loads(raw) if raw is not None else None
        elif supported_type is SupportedType.LIST_OF_STRING_KEYED_MAP:
            raw_list = await store.get_string_list(key)
            decoded = [json.loads(item) for item in raw_list] if raw_list is not None else None
        else:
            raise UnsupportedTypeError(supported_type, key=key)
        return decoded if matches(supported_type, decoded) else None


class SecureCodec:
    """String codec for string-only secure stores."""

    def encode(self, value: Any, supported_type: SupportedType) -> str:
        """Convert a value to its stored string form.

        Booleans are written as ``true``/``false``; structured values as JSON.
        """
        if supported_type is SupportedType.STRING:
            return value
        if supported_type is SupportedType.BOOL:
            return "true" if value else "false"
        if supported_type in (SupportedType.INT, SupportedType.DOUBLE):
            return repr(value)
        if supported_type.is_structured:
            return json.dumps(value)
        raise UnsupportedTypeError(supported_type)

    def decode(self, raw: str, supported_type: SupportedType) -> Any | None:
        """Parse a stored string as ``supported_type``.

        Primitive parse failures return None. Booleans are matched without
        regard to case, and numbers may carry surrounding whitespace.

        Raises:
            json.JSONDecodeError: If a structured value is not valid JSON
        """
        if supported_type is SupportedType.STRING:
            return raw
        if supported_type is SupportedType.BOOL:
            lowered = raw.lower()
            if lowered == "true":
                return True
            if lowered == "false":
                return False
            return None
        if supported_type in (SupportedType.INT, SupportedType.DOUBLE):
            return _parse_number(raw, int if supported_type is SupportedType.INT else float)
        if supported_type.is_structured:
            decoded = json.loads(raw)
            return decoded if matches(supported_type, decoded) else None
        raise UnsupportedTypeError(supported_type)
