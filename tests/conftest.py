"""Pytest configuration and fixtures."""

import pytest

from easy_cache import EasyCache, InMemoryPreferenceStore, InMemorySecureStore


@pytest.fixture
def preferences():
    """Empty in-memory preference store."""
    return InMemoryPreferenceStore()


@pytest.fixture
def secure_storage():
    """Empty in-memory secure store."""
    return InMemorySecureStore()


@pytest.fixture
def cache(preferences, secure_storage):
    """Cache wired to in-memory stores."""
    return EasyCache(preferences=preferences, secure_storage=secure_storage)


@pytest.fixture
def cache_env(monkeypatch, tmp_path):
    """Point the default file stores at a temp directory."""
    monkeypatch.setenv("EASY_CACHE_PREFERENCES_PATH", str(tmp_path / "preferences.json"))
    monkeypatch.setenv("EASY_CACHE_SECURE_PATH", str(tmp_path / "secure.bin"))
    monkeypatch.delenv("EASY_CACHE_SECRET_KEY", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_shared_cache():
    """Never leak the process-wide cache between tests."""
    yield
    EasyCache.reset_shared()
