"""Value codecs for each backend."""

from easy_cache.serialization.codecs import MemoryCodec, PersistentCodec, SecureCodec

__all__ = ["MemoryCodec", "PersistentCodec", "SecureCodec"]
