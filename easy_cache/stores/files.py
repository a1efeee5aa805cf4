"""Disk-backed stores used by the facade when no handles are injected.

Both stores keep their whole document in memory, load it once when opened
and rewrite the file after every mutation. File I/O and key derivation run
in a worker thread so the event loop is never blocked. Rewrites are
serialized by a per-store lock, so the file always ends up holding the
latest snapshot.
"""

import asyncio
import base64
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from easy_cache.core.exceptions import SecureStoreError
from easy_cache.core.models import SecureStoreOptions
from easy_cache.stores.memory import InMemoryPreferenceStore, InMemorySecureStore

logger = logging.getLogger(__name__)

_PBKDF2_SALT = b"easy-cache-secure-store-v1"
_PBKDF2_ITERATIONS = 480_000


def _atomic_write(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` without exposing a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _read_bytes(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def derive_fernet_key(secret_key: str) -> bytes:
    """Derive a Fernet key from a secret string via PBKDF2-HMAC-SHA256.

    Args:
        secret_key: Caller secret

    Returns:
        URL-safe base64-encoded 32-byte key
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=_PBKDF2_SALT,
        iterations=_PBKDF2_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret_key.encode("utf-8")))


class JsonFilePreferenceStore(InMemoryPreferenceStore):
    """Preference store persisted as a single JSON document.

    Example:
        >>> store = await JsonFilePreferenceStore.get_instance(Path("prefs.json"))
        >>> await store.set_string_list("recent", ["a", "b"])
    """

    def __init__(self, path: Path, initial_values: dict[str, Any] | None = None) -> None:
        super().__init__(initial_values)
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    @classmethod
    async def get_instance(cls, path: Path) -> "JsonFilePreferenceStore":
        """Open the store at ``path``, creating it lazily on first write.

        Raises:
            OSError: If the file exists but cannot be read
            ValueError: If the file is not a JSON object
        """
        path = Path(path)
        raw = await asyncio.to_thread(_read_bytes, path)
        values = json.loads(raw) if raw else {}
        if not isinstance(values, dict):
            raise ValueError(f"Preferences file {path} does not hold a JSON object")
        logger.debug(f"Opened preferences at {path} with {len(values)} keys")
        return cls(path, values)

    async def _persist(self) -> None:
        # Dump inside the lock: files are replaced in snapshot order
        async with self._write_lock:
            data = json.dumps(self._values).encode("utf-8")
            await asyncio.to_thread(_atomic_write, self.path, data)


class EncryptedFileSecureStore(InMemorySecureStore):
    """String-only store persisted to one Fernet-encrypted file.

    ``options.accessibility`` and ``options.synchronizable`` are platform
    keychain hints; they are kept on the store but do not change how the
    file is written.

    Use :meth:`open` to build a store from a secret string.

    Args:
        path: Location of the encrypted document
        fernet_key: Key from :func:`derive_fernet_key`
        options: Secure store configuration
        initial_values: Values already loaded from disk
    """

    def __init__(
        self,
        path: Path,
        fernet_key: bytes,
        options: SecureStoreOptions | None = None,
        initial_values: dict[str, str] | None = None,
    ) -> None:
        super().__init__(initial_values)
        self.path = Path(path)
        self.options = options or SecureStoreOptions()
        self._fernet = Fernet(fernet_key)
        self._write_lock = asyncio.Lock()

    @classmethod
    async def open(
        cls,
        path: Path,
        secret_key: str,
        options: SecureStoreOptions | None = None,
    ) -> "EncryptedFileSecureStore":
        """Open the store at ``path`` and decrypt its contents.

        Raises:
            SecureStoreError: If the file cannot be decrypted or parsed
            OSError: If the file exists but cannot be read
        """
        fernet_key = await asyncio.to_thread(derive_fernet_key, secret_key)
        store = cls(path, fernet_key, options)
        raw = await asyncio.to_thread(_read_bytes, store.path)
        if raw:
            store._values = store._decode_document(raw)
        logger.debug(f"Opened secure storage at {store.path} with {len(store._values)} keys")
        return store

    def _decode_document(self, raw: bytes) -> dict[str, str]:
        if self.options.encrypted_at_rest:
            try:
                raw = self._fernet.decrypt(raw)
            except InvalidToken as e:
                raise SecureStoreError(
                    f"Cannot decrypt {self.path}: wrong secret key or corrupt file"
                ) from e
        try:
            values = json.loads(raw)
        except ValueError as e:
            raise SecureStoreError(f"Secure storage file {self.path} is not valid JSON") from e
        if not isinstance(values, dict) or not all(isinstance(v, str) for v in values.values()):
            raise SecureStoreError(f"Secure storage file {self.path} is not a string mapping")
        return values

    async def _persist(self) -> None:
        async with self._write_lock:
            data = json.dumps(self._values).encode("utf-8")
            if self.options.encrypted_at_rest:
                data = self._fernet.encrypt(data)
            await asyncio.to_thread(_atomic_write, self.path, data)
