"""Domain event handlers."""

from warden.application.event_handlers.cache_invalidation_handler import (
    PermissionCacheInvalidationHandler,
)

__all__ = ["PermissionCacheInvalidationHandler"]
