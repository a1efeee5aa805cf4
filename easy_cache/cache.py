"""Cache facade with per-key lifecycle policies.

Values are stored under one of three policies: in memory for the process
session, in a persistent preference store, or in an encrypted secure store.
Reads probe all three backends so callers need not remember the policy a key
was written with.

Example:
    >>> cache = EasyCache.shared()
    >>> await cache.add_or_update("token", "abc", value_type=str, policy=CachePolicy.SECURE)
    >>> await cache.get_value_or_null("token", value_type=str)
    'abc'

Writes are two-phase: the key is first evicted from every backend, then
written to the backend its policy selects. The phases are not atomic, so
concurrent writers racing on one key can interleave; the last write to
complete wins.
"""

import logging
from typing import Any, Awaitable, Callable, ClassVar

from easy_cache.core.exceptions import DecodeError, EasyCacheError, TypeMismatchError
from easy_cache.core.models import CacheConfig, CacheEntry, CachePolicy, SupportedType
from easy_cache.core.validation import assert_supported, matches
from easy_cache.router import Backend, PolicyRouter
from easy_cache.serialization import MemoryCodec, PersistentCodec, SecureCodec
from easy_cache.stores import (
    EncryptedFileSecureStore,
    JsonFilePreferenceStore,
    PersistentKeyValueStore,
    SecureKeyValueStore,
)

logger = logging.getLogger(__name__)

PreferencesFactory = Callable[[], Awaitable[PersistentKeyValueStore | None]]
SecureStorageFactory = Callable[[], Awaitable[SecureKeyValueStore | None]]


class EasyCache:
    """Key/value cache with a lifecycle policy per key.

    Store handles may be injected directly or produced by async factories.
    Without either, the handles are opened lazily from ``config`` on first
    use. A handle that cannot be acquired stays unset: reads skip that
    backend and writes to it are dropped.

    Args:
        preferences: Open persistent store
        secure_storage: Open secure store
        config: Cache configuration (defaults to ``CacheConfig()``)
        preferences_factory: Async callable returning a persistent store
        secure_storage_factory: Async callable returning a secure store
    """

    _shared: ClassVar["EasyCache | None"] = None

    def __init__(
        self,
        preferences: PersistentKeyValueStore | None = None,
        secure_storage: SecureKeyValueStore | None = None,
        config: CacheConfig | None = None,
        preferences_factory: PreferencesFactory | None = None,
        secure_storage_factory: SecureStorageFactory | None = None,
    ) -> None:
        self.config = config or CacheConfig()
        self.in_memory_cache: dict[str, Any] = {}
        self.preferences = preferences
        self.secure_storage = secure_storage
        self.router = PolicyRouter()

        self._preferences_factory = preferences_factory or self._open_default_preferences
        self._secure_storage_factory = secure_storage_factory or self._open_default_secure_storage
        self._memory_codec = MemoryCodec()
        self._persistent_codec = PersistentCodec()
        self._secure_codec = SecureCodec()

    @classmethod
    def shared(cls) -> "EasyCache":
        """Return the process-wide cache, configured from the environment."""
        if cls._shared is None:
            cls._shared = cls(config=CacheConfig.from_env())
        return cls._shared

    @classmethod
    def reset_shared(cls) -> None:
        """Drop the process-wide cache so the next ``shared()`` builds a new one."""
        if cls._shared is not None:
            cls._shared.reset()
        cls._shared = None

    def reset(self) -> None:
        """Empty the in-memory table and unset both store handles.

        The next backend-touching call acquires the handles again through
        the factories.
        """
        self.in_memory_cache.clear()
        self.preferences = None
        self.secure_storage = None

    async def add_or_update(
        self,
        key: str,
        value: Any,
        *,
        value_type: Any = Any,
        policy: CachePolicy = CachePolicy.APP_SESSION,
    ) -> None:
        """Add a value to the cache, replacing any existing value for the key.

        Args:
            key: Cache key
            value: Value to store
            value_type: Declared type of ``value``
            policy: Lifecycle policy selecting the backend

        Raises:
            MissingTypeError: If ``value_type`` was not given
            UnsupportedTypeError: If ``value_type`` is not supported
            TypeMismatchError: If ``value`` is not a ``value_type``
        """
        supported_type = assert_supported(value_type, value, key=key)
        if value is None:
            raise TypeMismatchError(value_type, value, key=key)

        entry = CacheEntry(
            key=key, value=value, value_type=supported_type, policy=CachePolicy(policy)
        )
        await self.evict_all(key)
        await self.write_to(self.router.backend_for(entry.policy), entry)
        self._trace(f"addOrUpdate {key} with {entry.policy.value} policy")

    async def get_value_or_null(self, key: str, *, value_type: Any = Any) -> Any | None:
        """Get a value from the cache.

        Args:
            key: Cache key
            value_type: Requested type

        Returns:
            The first value found in probe order that is a ``value_type``,
            or None

        Raises:
            MissingTypeError: If ``value_type`` was not given
            UnsupportedTypeError: If ``value_type`` is not supported
            DecodeError: If a stored value is malformed
        """
        supported_type = assert_supported(value_type, key=key)
        await self._init_if_needed()

        for backend in self.router.probe_order():
            value = await self._read_from(backend, key, supported_type)
            if value is not None and matches(supported_type, value):
                self._trace(f"Hit ({backend.value}) for {key}")
                return value

        self._trace(f"Miss for {key}")
        return None

    async def get_value_or_default(self, key: str, default: Any, *, value_type: Any = Any) -> Any:
        """Get a value from the cache, or ``default`` if there is none."""
        value = await self.get_value_or_null(key, value_type=value_type)
        return default if value is None else value

    async def remove(self, key: str) -> None:
        """Remove a key from every backend. Absent keys are ignored."""
        await self.evict_all(key)
        self._trace(f"Removed {key}")

    async def purge(
        self,
        *,
        include_app_session: bool = True,
        include_app_install: bool = True,
        include_secure_storage: bool = True,
    ) -> None:
        """Clear whole backends.

        Args:
            include_app_session: Empty the in-memory table
            include_app_install: Clear the persistent store
            include_secure_storage: Clear the secure store
        """
        await self._init_if_needed()
        targets = self.router.purge_targets(
            include_app_session=include_app_session,
            include_app_install=include_app_install,
            include_secure_storage=include_secure_storage,
        )
        for backend in targets:
            if backend is Backend.MEMORY:
                self.in_memory_cache.clear()
            elif backend is Backend.PERSISTENT and self.preferences is not None:
                await self.preferences.clear()
            elif backend is Backend.SECURE and self.secure_storage is not None:
                await self.secure_storage.delete_all()
            self._trace(f"{backend.value} cache was purged")

    async def evict_all(self, key: str) -> None:
        """First write phase: delete ``key`` from every backend."""
        await self._init_if_needed()
        for backend in self.router.removal_targets():
            if backend is Backend.MEMORY:
                self.in_memory_cache.pop(key, None)
            elif backend is Backend.PERSISTENT and self.preferences is not None:
                await self.preferences.remove(key)
            elif backend is Backend.SECURE and self.secure_storage is not None:
                await self.secure_storage.delete(key)

    async def write_to(self, backend: Backend, entry: CacheEntry) -> None:
        """Second write phase: store ``entry`` in one backend.

        Writing to an unavailable backend is a no-op.
        """
        await self._init_if_needed()
        if backend is Backend.MEMORY:
            self.in_memory_cache[entry.key] = self._memory_codec.encode(
                entry.value, entry.value_type
            )
        elif backend is Backend.PERSISTENT:
            if self.preferences is None:
                self._trace(f"Preferences unavailable, dropped write of {entry.key}")
                return
            await self._persistent_codec.write(
                self.preferences, entry.key, entry.value, entry.value_type
            )
        elif backend is Backend.SECURE:
            if self.secure_storage is None:
                self._trace(f"Secure storage unavailable, dropped write of {entry.key}")
                return
            await self.secure_storage.write(
                entry.key, self._secure_codec.encode(entry.value, entry.value_type)
            )

    async def _read_from(
        self, backend: Backend, key: str, supported_type: SupportedType
    ) -> Any | None:
        if backend is Backend.MEMORY:
            if key not in self.in_memory_cache:
                return None
            return self._memory_codec.decode(self.in_memory_cache[key], supported_type)

        store = self.preferences if backend is Backend.PERSISTENT else self.secure_storage
        if store is None or not await store.contains_key(key):
            return None

        try:
            if backend is Backend.PERSISTENT:
                return await self._persistent_codec.read(self.preferences, key, supported_type)
            raw = await self.secure_storage.read(key)
            return self._secure_codec.decode(raw, supported_type) if raw is not None else None
        except (ValueError, TypeError) as e:
            logger.warning(f"Error getting {key} from {backend.value}: {e}")
            raise DecodeError(key, backend.value, supported_type.value) from e

    async def _init_if_needed(self) -> None:
        """Acquire unset store handles; opening them is async so it cannot run in __init__."""
        if self.preferences is None:
            self.preferences = await self._acquire(Backend.PERSISTENT, self._preferences_factory)
        if self.secure_storage is None:
            self.secure_storage = await self._acquire(Backend.SECURE, self._secure_storage_factory)

    async def _acquire(self, backend: Backend, factory: Callable[[], Awaitable[Any]]) -> Any:
        try:
            return await factory()
        except (OSError, ValueError, EasyCacheError) as e:
            logger.warning(f"Could not open {backend.value}, treating it as unavailable: {e}")
            return None

    async def _open_default_preferences(self) -> PersistentKeyValueStore:
        return await JsonFilePreferenceStore.get_instance(self.config.preferences_path)

    async def _open_default_secure_storage(self) -> SecureKeyValueStore | None:
        if not self.config.secret_key:
            return None
        return await EncryptedFileSecureStore.open(
            self.config.secure_storage_path,
            self.config.secret_key,
            self.config.secure_options,
        )

    def _trace(self, message: str) -> None:
        if self.config.enable_logging:
            logger.info(message)
