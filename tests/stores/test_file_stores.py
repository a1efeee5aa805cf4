"""Tests for the disk-backed stores."""

import asyncio
import json
import threading

import pytest

from easy_cache import (
    EncryptedFileSecureStore,
    JsonFilePreferenceStore,
    KeychainAccessibility,
    SecureStoreError,
    SecureStoreOptions,
)
from easy_cache.stores.files import derive_fernet_key


@pytest.mark.asyncio
async def test_preferences_persist_to_json(tmp_path) -> None:
    """Test values written by one instance are read by the next."""
    path = tmp_path / "nested" / "preferences.json"
    store = await JsonFilePreferenceStore.get_instance(path)

    await store.set_string("name", "easy")
    await store.set_int("count", 2)
    await store.set_double("ratio", 0.25)
    await store.set_bool("enabled", False)
    await store.set_string_list("tags", ["a", "b"])

    assert json.loads(path.read_text())["tags"] == ["a", "b"]

    reopened = await JsonFilePreferenceStore.get_instance(path)
    assert await reopened.get_string("name") == "easy"
    assert await reopened.get_int("count") == 2
    assert await reopened.get_double("ratio") == 0.25
    assert await reopened.get_bool("enabled") is False
    assert await reopened.get_string_list("tags") == ["a", "b"]


@pytest.mark.asyncio
async def test_preferences_missing_file_is_empty(tmp_path) -> None:
    store = await JsonFilePreferenceStore.get_instance(tmp_path / "absent.json")

    assert store.snapshot() == {}
    assert not (tmp_path / "absent.json").exists()


@pytest.mark.asyncio
async def test_preferences_clear_rewrites_file(tmp_path) -> None:
    path = tmp_path / "preferences.json"
    store = await JsonFilePreferenceStore.get_instance(path)
    await store.set_string("a", "b")

    await store.clear()

    assert json.loads(path.read_text()) == {}


@pytest.mark.asyncio
async def test_preferences_reject_non_object(tmp_path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("[1, 2]")

    with pytest.raises(ValueError):
        await JsonFilePreferenceStore.get_instance(path)


@pytest.mark.asyncio
async def test_secure_store_encrypts_at_rest(tmp_path) -> None:
    """Test the secure file does not contain plaintext and reopens with the same key."""
    path = tmp_path / "secure.bin"
    store = await EncryptedFileSecureStore.open(path, "s3cret")

    await store.write("token", "very-secret-value")

    assert b"very-secret-value" not in path.read_bytes()
    reopened = await EncryptedFileSecureStore.open(path, "s3cret")
    assert await reopened.read("token") == "very-secret-value"


@pytest.mark.asyncio
async def test_secure_store_wrong_key(tmp_path) -> None:
    path = tmp_path / "secure.bin"
    store = await EncryptedFileSecureStore.open(path, "right")
    await store.write("token", "value")

    with pytest.raises(SecureStoreError):
        await EncryptedFileSecureStore.open(path, "wrong")


@pytest.mark.asyncio
async def test_secure_store_plaintext_when_encryption_disabled(tmp_path) -> None:
    path = tmp_path / "secure.json"
    options = SecureStoreOptions(
        encrypted_at_rest=False,
        accessibility=KeychainAccessibility.FIRST_UNLOCK,
        synchronizable=True,
    )
    store = await EncryptedFileSecureStore.open(path, "unused", options)

    await store.write("token", "value")

    assert json.loads(path.read_text()) == {"token": "value"}
    assert store.options.accessibility is KeychainAccessibility.FIRST_UNLOCK
    assert store.options.synchronizable is True


@pytest.mark.asyncio
async def test_secure_store_delete_all(tmp_path) -> None:
    path = tmp_path / "secure.bin"
    store = await EncryptedFileSecureStore.open(path, "s3cret")
    await store.write("a", "1")
    await store.write("b", "2")

    await store.delete_all()

    reopened = await EncryptedFileSecureStore.open(path, "s3cret")
    assert reopened.snapshot() == {}


@pytest.mark.asyncio
async def test_preferences_concurrent_writes_all_reach_disk(tmp_path) -> None:
    """Test overlapping mutations leave every key in the file."""
    for run in range(5):
        path = tmp_path / f"preferences-{run}.json"
        store = await JsonFilePreferenceStore.get_instance(path)

        await asyncio.gather(*(store.set_string(f"k{i}", "v") for i in range(20)))

        reopened = await JsonFilePreferenceStore.get_instance(path)
        assert reopened.snapshot() == {f"k{i}": "v" for i in range(20)}


@pytest.mark.asyncio
async def test_secure_store_concurrent_writes_all_reach_disk(tmp_path) -> None:
    path = tmp_path / "secure.bin"
    store = await EncryptedFileSecureStore.open(path, "s3cret")

    await asyncio.gather(*(store.write(f"k{i}", str(i)) for i in range(20)))
    await asyncio.gather(store.delete("k0"), store.write("k1", "updated"))

    reopened = await EncryptedFileSecureStore.open(path, "s3cret")
    expected = {f"k{i}": str(i) for i in range(2, 20)}
    expected["k1"] = "updated"
    assert reopened.snapshot() == expected


@pytest.mark.asyncio
async def test_secure_store_derives_key_off_the_event_loop(tmp_path, mocker) -> None:
    """Test the PBKDF2 key derivation runs in a worker thread."""
    loop_thread = threading.get_ident()
    derive_threads = []

    def derive(secret_key: str) -> bytes:
        derive_threads.append(threading.get_ident())
        return derive_fernet_key(secret_key)

    mocker.patch("easy_cache.stores.files.derive_fernet_key", side_effect=derive)

    store = await EncryptedFileSecureStore.open(tmp_path / "secure.bin", "s3cret")
    await store.write("token", "value")

    assert len(derive_threads) == 1
    assert derive_threads[0] != loop_thread
