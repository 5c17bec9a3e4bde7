"""Domain events package.

Usage:
    from warden.domain.events import RoleCreated, REGISTRY_EVENTS
"""

from warden.domain.events.base_event import DomainEvent
from warden.domain.events.permission_events import (
    REGISTRY_EVENTS,
    PermissionAttached,
    PermissionCreated,
    PermissionDeleted,
    PermissionDetached,
    PermissionRegistryChanged,
    PermissionUpdated,
    RoleAssigned,
    RoleCreated,
    RoleDeleted,
    RoleRemoved,
    RoleUpdated,
)

__all__ = [
    "DomainEvent",
    "PermissionAttached",
    "PermissionCreated",
    "PermissionDeleted",
    "PermissionDetached",
    "PermissionRegistryChanged",
    "PermissionUpdated",
    "REGISTRY_EVENTS",
    "RoleAssigned",
    "RoleCreated",
    "RoleDeleted",
    "RoleRemoved",
    "RoleUpdated",
]
