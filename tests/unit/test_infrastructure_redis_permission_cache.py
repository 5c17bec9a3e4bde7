"""Unit tests for RedisPermissionCache.

Tests cover:
- Prefix scan and batched unlink
- Empty cache
- Redis errors propagate
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from warden.infrastructure.cache import RedisPermissionCache


def _redis_with_keys(keys):
    client = MagicMock()

    async def scan_iter(match):
        for key in keys:
            yield key

    client.scan_iter = MagicMock(side_effect=scan_iter)
    client.unlink = AsyncMock(side_effect=lambda *batch: len(batch))
    return client


@pytest.mark.unit
class TestRedisPermissionCache:
    """Test invalidate()."""

    async def test_invalidate_deletes_prefixed_keys(self, mock_logger):
        """Test keys under the prefix are unlinked."""
        client = _redis_with_keys([b"warden.permission.cache:1", b"warden.permission.cache:2"])
        cache = RedisPermissionCache(client, "warden.permission.cache", mock_logger)

        await cache.invalidate()

        client.scan_iter.assert_called_once_with(match="warden.permission.cache*")
        client.unlink.assert_awaited_once_with(
            b"warden.permission.cache:1", b"warden.permission.cache:2"
        )
        assert mock_logger.debug.call_args.kwargs["deleted_keys"] == 2

    async def test_invalidate_batches(self, mock_logger):
        """Test large key sets are unlinked in batches of 500."""
        client = _redis_with_keys([f"p:{i}" for i in range(1200)])
        cache = RedisPermissionCache(client, "p:", mock_logger)

        await cache.invalidate()

        sizes = [len(call.args) for call in client.unlink.await_args_list]
        assert sizes == [500, 500, 200]

    async def test_invalidate_empty(self, mock_logger):
        """Test nothing is unlinked when no keys exist."""
        client = _redis_with_keys([])
        cache = RedisPermissionCache(client, "p:", mock_logger)

        await cache.invalidate()

        client.unlink.assert_not_awaited()

    async def test_redis_error_propagates(self, mock_logger):
        """Test connection failures surface to the caller."""
        client = MagicMock()
        client.scan_iter = MagicMock(side_effect=RedisConnectionError("down"))
        cache = RedisPermissionCache(client, "p:", mock_logger)

        with pytest.raises(RedisConnectionError):
            await cache.invalidate()
