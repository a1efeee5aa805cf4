"""Core abstractions and models."""

from easy_cache.core.exceptions import (
    DecodeError,
    EasyCacheError,
    MissingTypeError,
    SecureStoreError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from easy_cache.core.models import (
    CacheConfig,
    CacheEntry,
    CachePolicy,
    KeychainAccessibility,
    SecureStoreOptions,
    SupportedType,
)
from easy_cache.core.validation import assert_supported, matches, resolve_type

__all__ = [
    # Exceptions
    "EasyCacheError",
    "MissingTypeError",
    "UnsupportedTypeError",
    "TypeMismatchError",
    "DecodeError",
    "SecureStoreError",
    # Models
    "CacheConfig",
    "CacheEntry",
    "CachePolicy",
    "KeychainAccessibility",
    "SecureStoreOptions",
    "SupportedType",
    # Validation
    "assert_supported",
    "matches",
    "resolve_type",
]
