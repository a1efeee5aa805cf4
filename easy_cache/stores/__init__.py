"""Backing stores for the persistent and secure cache policies."""

from easy_cache.stores.base import PersistentKeyValueStore, SecureKeyValueStore
from easy_cache.stores.files import EncryptedFileSecureStore, JsonFilePreferenceStore
from easy_cache.stores.memory import InMemoryPreferenceStore, InMemorySecureStore

__all__ = [
    "PersistentKeyValueStore",
    "SecureKeyValueStore",
    "InMemoryPreferenceStore",
    "InMemorySecureStore",
    "JsonFilePreferenceStore",
    "EncryptedFileSecureStore",
]
