"""Permission cache invalidation handler.

Flushes the whole permission cache whenever the registry changes.

Subscriptions:
- Every PermissionRegistryChanged event type in REGISTRY_EVENTS

Architecture:
    - Application layer (reacts to domain events)
    - App-scoped singleton, subscribed at container startup
    - Cache failures raise; the event bus logs them without affecting the
      operation that published the event
"""

from warden.domain.events import REGISTRY_EVENTS, PermissionRegistryChanged
from warden.domain.protocols.event_bus_protocol import EventBusProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.permission_cache_protocol import PermissionCacheProtocol


class PermissionCacheInvalidationHandler:
    """Invalidates the permission cache on registry changes.

    Attributes:
        _cache: Permission cache to flush.
        _logger: For structured logging.

    Example:
        >>> handler = PermissionCacheInvalidationHandler(cache, logger)
        >>> handler.subscribe_all(event_bus)
    """

    def __init__(self, cache: PermissionCacheProtocol, logger: LoggerProtocol) -> None:
        """Initialize handler with dependencies.

        Args:
            cache: Permission cache to flush.
            logger: Logger.
        """
        self._cache = cache
        self._logger = logger

    async def handle(self, event: PermissionRegistryChanged) -> None:
        """Flush the cache after any registry mutation."""
        await self._cache.invalidate()
        self._logger.debug(
            "permission_cache_flushed",
            event_type=type(event).__name__,
            event_id=str(event.event_id),
        )

    def subscribe_all(self, event_bus: EventBusProtocol) -> None:
        """Subscribe handle() to every registry event type."""
        for event_type in REGISTRY_EVENTS:
            event_bus.subscribe(event_type, self.handle)  # type: ignore[arg-type]
