"""Permission registry events.

Every successful mutation of roles, permissions or either edge set emits one
of these events. They all derive PermissionRegistryChanged, which is what the
cache invalidation handler subscribes to.

Handlers:
- PermissionCacheInvalidationHandler: ALL events (full cache flush)
"""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class PermissionRegistryChanged(DomainEvent):
    """Base for every event that makes cached permission data stale."""


# ═══════════════════════════════════════════════════════════════
# Roles
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class RoleCreated(PermissionRegistryChanged):
    """Role persisted.

    Attributes:
        role_id: New role id.
        name: Role name.
        guard_name: Role guard.
        team_id: Owning team (None for global roles).
    """

    role_id: UUID
    name: str
    guard_name: str
    team_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class RoleUpdated(PermissionRegistryChanged):
    """Role renamed.

    Attributes:
        role_id: Role id.
        old_name: Name before the rename.
        new_name: Name after the rename.
    """

    role_id: UUID
    old_name: str
    new_name: str


@dataclass(frozen=True, kw_only=True)
class RoleDeleted(PermissionRegistryChanged):
    """Role and all its edges removed.

    Attributes:
        role_id: Deleted role id.
        name: Role name at deletion time.
    """

    role_id: UUID
    name: str


# ═══════════════════════════════════════════════════════════════
# Permissions
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class PermissionCreated(PermissionRegistryChanged):
    """Permission persisted.

    Attributes:
        permission_id: New permission id.
        name: Permission name.
        guard_name: Permission guard.
    """

    permission_id: UUID
    name: str
    guard_name: str


@dataclass(frozen=True, kw_only=True)
class PermissionUpdated(PermissionRegistryChanged):
    """Permission renamed.

    Attributes:
        permission_id: Permission id.
        old_name: Name before the rename.
        new_name: Name after the rename.
    """

    permission_id: UUID
    old_name: str
    new_name: str


@dataclass(frozen=True, kw_only=True)
class PermissionDeleted(PermissionRegistryChanged):
    """Permission and all its edges removed.

    Attributes:
        permission_id: Deleted permission id.
        name: Permission name at deletion time.
    """

    permission_id: UUID
    name: str


# ═══════════════════════════════════════════════════════════════
# Edges
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, kw_only=True)
class PermissionAttached(PermissionRegistryChanged):
    """Role↔Permission edge inserted."""

    role_id: UUID
    permission_id: UUID


@dataclass(frozen=True, kw_only=True)
class PermissionDetached(PermissionRegistryChanged):
    """Role↔Permission edge removed."""

    role_id: UUID
    permission_id: UUID


@dataclass(frozen=True, kw_only=True)
class RoleAssigned(PermissionRegistryChanged):
    """Principal↔Role edge inserted.

    Attributes:
        principal_type: Kind of principal.
        principal_id: Principal identifier.
        role_id: Assigned role id.
        team_id: Team the assignment is scoped to.
    """

    principal_type: str
    principal_id: str
    role_id: UUID
    team_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class RoleRemoved(PermissionRegistryChanged):
    """Principal↔Role edge removed."""

    principal_type: str
    principal_id: str
    role_id: UUID
    team_id: UUID | None = None


REGISTRY_EVENTS: tuple[type[PermissionRegistryChanged], ...] = (
    RoleCreated,
    RoleUpdated,
    RoleDeleted,
    PermissionCreated,
    PermissionUpdated,
    PermissionDeleted,
    PermissionAttached,
    PermissionDetached,
    RoleAssigned,
    RoleRemoved,
)
"""Concrete event types; the event bus matches exact types only."""
