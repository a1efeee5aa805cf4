"""Basic usage examples for easy-cache."""

import asyncio
import os
from typing import Any

from easy_cache import CacheConfig, CachePolicy, EasyCache


async def example_policies() -> None:
    """Example: Storing values under each lifecycle policy."""
    print("\n=== Cache Policies Example ===\n")

    config = CacheConfig(
        secret_key=os.getenv("EASY_CACHE_SECRET_KEY", "your-secret-key"),
        enable_logging=True,
    )
    cache = EasyCache(config=config)

    await cache.add_or_update("launch_count", 1, value_type=int, policy=CachePolicy.APP_INSTALL)
    await cache.add_or_update("auth_token", "abc123", value_type=str, policy=CachePolicy.SECURE)
    await cache.add_or_update(
        "profile",
        {"name": "Ada", "langs": ["en", "fr"]},
        value_type=dict[str, Any],
    )

    print(f"Launches: {await cache.get_value_or_default('launch_count', 0, value_type=int)}")
    print(f"Token: {await cache.get_value_or_null('auth_token', value_type=str)}")
    print(f"Profile: {await cache.get_value_or_null('profile', value_type=dict[str, Any])}")

    # Session values are gone after this, install and secure values remain
    await cache.purge(include_app_install=False, include_secure_storage=False)
    print(f"Profile after purge: {await cache.get_value_or_null('profile', value_type=dict[str, Any])}")


async def example_shared_cache() -> None:
    """Example: Using the process-wide cache configured from EASY_CACHE_* variables."""
    print("\n=== Shared Cache Example ===\n")

    cache = EasyCache.shared()
    await cache.add_or_update("recent_searches", ["python", "asyncio"], value_type=list[str])

    print(f"Recent: {await EasyCache.shared().get_value_or_null('recent_searches', value_type=list[str])}")


async def main() -> None:
    await example_policies()
    await example_shared_cache()


if __name__ == "__main__":
    asyncio.run(main())
