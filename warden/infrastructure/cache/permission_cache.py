"""Redis adapter implementing PermissionCacheProtocol.

Host applications cache denormalized role/permission lookups in Redis under a
common key prefix (Settings.permission_cache_key). Warden only needs to flush
that prefix whenever the registry changes.

Architecture:
- Implements PermissionCacheProtocol without inheritance (structural typing)
- Full invalidation only (no keyed deletes)
- Redis exceptions propagate; the event bus logs them as handler failures
"""

from redis.asyncio import Redis

from warden.domain.protocols.logger_protocol import LoggerProtocol

_DELETE_BATCH = 500


class RedisPermissionCache:
    """Redis-backed permission cache.

    Attributes:
        _redis: Async Redis client instance.
        _key_prefix: Prefix shared by every cached permission key.
        _logger: Logger for invalidation results.
    """

    def __init__(
        self,
        redis_client: Redis,
        key_prefix: str,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize the cache adapter.

        Args:
            redis_client: Async Redis client instance.
            key_prefix: Prefix shared by every cached permission key.
            logger: Logger for invalidation results.
        """
        self._redis = redis_client
        self._key_prefix = key_prefix
        self._logger = logger

    async def invalidate(self) -> None:
        """Delete every key under the permission cache prefix."""
        deleted = 0
        batch: list[bytes | str] = []
        async for key in self._redis.scan_iter(match=f"{self._key_prefix}*"):
            batch.append(key)
            if len(batch) >= _DELETE_BATCH:
                deleted += await self._redis.unlink(*batch)
                batch.clear()
        if batch:
            deleted += await self._redis.unlink(*batch)

        self._logger.debug(
            "permission_cache_invalidated",
            key_prefix=self._key_prefix,
            deleted_keys=deleted,
        )
