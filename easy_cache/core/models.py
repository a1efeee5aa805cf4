"""Core data models for the cache facade."""

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CACHE_DIR = Path.home() / ".easy_cache"


class SupportedType(str, Enum):
    """Closed set of value types the cache can store."""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    STRING_LIST = "string_list"
    STRING_KEYED_MAP = "string_keyed_map"
    LIST_OF_STRING_KEYED_MAP = "list_of_string_keyed_map"

    @property
    def is_structured(self) -> bool:
        """Whether the type needs JSON encoding on string-only stores."""
        return self in (
            SupportedType.STRING_LIST,
            SupportedType.STRING_KEYED_MAP,
            SupportedType.LIST_OF_STRING_KEYED_MAP,
        )


class CachePolicy(str, Enum):
    """Lifecycle scope of a cached key."""

    APP_SESSION = "app_session"  # in-memory only
    APP_INSTALL = "app_install"  # persistent preference store
    SECURE = "secure"  # encrypted secure store


class KeychainAccessibility(str, Enum):
    """When secure items may be read, as understood by platform keychains."""

    PASSCODE = "passcode"
    UNLOCKED = "unlocked"
    UNLOCKED_THIS_DEVICE = "unlocked_this_device"
    FIRST_UNLOCK = "first_unlock"
    FIRST_UNLOCK_THIS_DEVICE = "first_unlock_this_device"


class CacheEntry(BaseModel):
    """A key, its typed value and the policy that owns it."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any
    value_type: SupportedType
    policy: CachePolicy


class SecureStoreOptions(BaseModel):
    """Pass-through configuration for the secure store."""

    encrypted_at_rest: bool = True
    accessibility: KeychainAccessibility = KeychainAccessibility.UNLOCKED
    synchronizable: bool = False


class CacheConfig(BaseModel):
    """Configuration for the cache facade and its default stores."""

    preferences_path: Path = Field(default_factory=lambda: DEFAULT_CACHE_DIR / "preferences.json")
    secure_storage_path: Path = Field(default_factory=lambda: DEFAULT_CACHE_DIR / "secure.bin")
    secret_key: str | None = None
    secure_options: SecureStoreOptions = Field(default_factory=SecureStoreOptions)

    # Per-operation trace messages (hits, misses, writes, purges)
    enable_logging: bool = False

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Build configuration from ``EASY_CACHE_*`` environment variables.

        Returns:
            Configuration with defaults for every unset variable

        Raises:
            ValidationError: If a variable holds an invalid value
        """
        env_fields = {
            "preferences_path": "EASY_CACHE_PREFERENCES_PATH",
            "secure_storage_path": "EASY_CACHE_SECURE_PATH",
            "secret_key": "EASY_CACHE_SECRET_KEY",
            "enable_logging": "EASY_CACHE_ENABLE_LOGGING",
        }
        data: dict[str, Any] = {
            field: os.environ[var] for field, var in env_fields.items() if os.environ.get(var)
        }
        if os.environ.get("EASY_CACHE_SYNCHRONIZABLE"):
            data["secure_options"] = {"synchronizable": os.environ["EASY_CACHE_SYNCHRONIZABLE"]}
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, path: Path) -> "CacheConfig":
        """Load configuration from a YAML mapping.

        Args:
            path: Path to YAML file

        Returns:
            Parsed configuration
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
