"""Easy Cache - key/value caching with per-key lifecycle policies."""

from easy_cache.cache import EasyCache
from easy_cache.core import (
    CacheConfig,
    CacheEntry,
    CachePolicy,
    DecodeError,
    EasyCacheError,
    KeychainAccessibility,
    MissingTypeError,
    SecureStoreError,
    SecureStoreOptions,
    SupportedType,
    TypeMismatchError,
    UnsupportedTypeError,
)
from easy_cache.router import Backend, PolicyRouter
from easy_cache.stores import (
    EncryptedFileSecureStore,
    InMemoryPreferenceStore,
    InMemorySecureStore,
    JsonFilePreferenceStore,
    PersistentKeyValueStore,
    SecureKeyValueStore,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Facade
    "EasyCache",
    "PolicyRouter",
    "Backend",
    # Models
    "CacheConfig",
    "CacheEntry",
    "CachePolicy",
    "KeychainAccessibility",
    "SecureStoreOptions",
    "SupportedType",
    # Exceptions
    "EasyCacheError",
    "MissingTypeError",
    "UnsupportedTypeError",
    "TypeMismatchError",
    "DecodeError",
    "SecureStoreError",
    # Stores
    "PersistentKeyValueStore",
    "SecureKeyValueStore",
    "InMemoryPreferenceStore",
    "InMemorySecureStore",
    "JsonFilePreferenceStore",
    "EncryptedFileSecureStore",
]
