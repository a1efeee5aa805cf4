"""Custom exceptions for the cache facade."""

from typing import Any


class EasyCacheError(Exception):
    """Base exception for cache errors."""

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize error.

        Args:
            message: Error message
            key: Cache key involved, if any
        """
        self.key = key
        prefix = f"[{key}] " if key is not None else ""
        super().__init__(f"{prefix}{message}")


class MissingTypeError(EasyCacheError, ValueError):
    """Raised when no value type was given for an add or get."""

    def __init__(self, key: str | None = None) -> None:
        super().__init__("Specify a value_type for this operation", key=key)


class UnsupportedTypeError(EasyCacheError, TypeError):
    """Raised when the requested value type is outside the supported set."""

    def __init__(self, value_type: Any, key: str | None = None) -> None:
        """Initialize error.

        Args:
            value_type: The rejected type
            key: Cache key involved, if any
        """
        self.value_type = value_type
        message = (
            f"Unsupported type {value_type!r}. Only str, int, float, bool, list[str], "
            "dict[str, Any] and list[dict[str, Any]] are supported."
        )
        super().__init__(message, key=key)


def _type_name(value_type: Any) -> str:
    return value_type.__name__ if isinstance(value_type, type) else str(value_type)


class TypeMismatchError(EasyCacheError, TypeError):
    """Raised when a value is not an instance of its declared type."""

    def __init__(self, value_type: Any, actual: Any, key: str | None = None) -> None:
        """Initialize error.

        Args:
            value_type: Declared type
            actual: Offending value
            key: Cache key involved, if any
        """
        self.value_type = value_type
        self.actual = actual
        super().__init__(
            f"Type mismatch. {type(actual).__name__} is not a {_type_name(value_type)}", key=key
        )


class DecodeError(EasyCacheError):
    """Raised when a stored value cannot be decoded into the requested type."""

    def __init__(self, key: str, backend: str, value_type: Any) -> None:
        """Initialize error.

        Args:
            key: Cache key being read
            backend: Backend that held the value
            value_type: Requested type
        """
        self.backend = backend
        self.value_type = value_type
        super().__init__(f"Could not decode {backend} value as {value_type}", key=key)


class SecureStoreError(EasyCacheError):
    """Raised when the secure store document cannot be opened."""

    pass
