"""Routing of cache operations to backends."""

from enum import Enum

from easy_cache.core.models import CachePolicy


class Backend(str, Enum):
    """Storage namespaces behind the facade."""

    MEMORY = "in-memory"
    PERSISTENT = "preferences"
    SECURE = "secure storage"


class PolicyRouter:
    """Maps policies to backends and defines the read probe order.

    Writes go to exactly one backend. Reads probe every backend in a fixed
    order so callers do not need to know which policy stored a key.
    """

    WRITE_ROUTES: dict[CachePolicy, Backend] = {
        CachePolicy.APP_SESSION: Backend.MEMORY,
        CachePolicy.APP_INSTALL: Backend.PERSISTENT,
        CachePolicy.SECURE: Backend.SECURE,
    }
    PROBE_ORDER: tuple[Backend, ...] = (Backend.MEMORY, Backend.PERSISTENT, Backend.SECURE)

    def backend_for(self, policy: CachePolicy) -> Backend:
        """Return the single backend that receives writes for ``policy``."""
        return self.WRITE_ROUTES[CachePolicy(policy)]

    def probe_order(self) -> tuple[Backend, ...]:
        return self.PROBE_ORDER

    def removal_targets(self) -> tuple[Backend, ...]:
        """Backends a key is removed from; always all of them."""
        return self.PROBE_ORDER

    def purge_targets(
        self,
        include_app_session: bool = True,
        include_app_install: bool = True,
        include_secure_storage: bool = True,
    ) -> list[Backend]:
        """Return the backends whose whole namespace a purge clears."""
        switches = {
            Backend.MEMORY: include_app_session,
            Backend.PERSISTENT: include_app_install,
            Backend.SECURE: include_secure_storage,
        }
        return [backend for backend in self.PROBE_ORDER if switches[backend]]
