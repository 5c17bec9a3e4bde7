"""Permission cache protocol (port).

The permission cache is an external, denormalized read cache of the role and
permission graph. Warden only depends on its invalidation contract: any
mutation flushes it completely.

Implementations:
    - RedisPermissionCache: warden/infrastructure/cache/permission_cache.py
"""

from typing import Protocol


class PermissionCacheProtocol(Protocol):
    """What Warden needs from a permission cache."""

    async def invalidate(self) -> None:
        """Drop every cached entry.

        Called after each successful create, update, delete, attach, detach,
        assign or remove. No keyed or partial invalidation.
        """
        ...
