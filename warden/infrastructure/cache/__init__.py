"""Permission cache adapters."""

from warden.infrastructure.cache.permission_cache import RedisPermissionCache

__all__ = ["RedisPermissionCache"]
