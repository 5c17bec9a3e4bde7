"""AssignmentRepository protocol for the two edge sets.

Edges hold ids only: (role_id, permission_id) and
(principal_type, principal_id, role_id, team_id). Entity records stay with
the role and permission repositories.
"""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from warden.domain.entities import Permission, Role
from warden.domain.value_objects import TeamScope

type EdgeDiff = tuple[frozenset[UUID], frozenset[UUID]]
"""(added, removed) ids reported by the replace_* operations."""


class AssignmentRepository(Protocol):
    """Assignment repository protocol (port).

    All edge insertions and removals are idempotent and report whether
    anything changed, so callers only publish events for real changes.
    """

    async def attach(self, role_id: UUID, permission_id: UUID) -> bool:
        """Insert a role→permission edge. Returns False if already present."""
        ...

    async def detach(self, role_id: UUID, permission_id: UUID) -> bool:
        """Remove a role→permission edge. Returns False if absent."""
        ...

    async def replace_permissions(
        self, role_id: UUID, permission_ids: Collection[UUID]
    ) -> EdgeDiff:
        """Make permission_ids the exact permission set of role_id.

        Returns:
            (added, removed) permission ids; both empty if nothing changed.
        """
        ...

    async def permissions_of(self, role_ids: Collection[UUID]) -> list[Permission]:
        """Union of permissions held by the given roles (no duplicates)."""
        ...

    async def assign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        """Insert a principal→role edge. Returns False if already present."""
        ...

    async def unassign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        """Remove the principal→role edge stamped with team_id."""
        ...

    async def replace_roles(
        self,
        principal_type: str,
        principal_id: str,
        role_ids: Collection[UUID],
        team_id: UUID | None,
    ) -> EdgeDiff:
        """Make role_ids the exact role set of the principal within team_id.

        Returns:
            (added, removed) role ids; both empty if nothing changed.
        """
        ...

    async def roles_of(
        self,
        principal_type: str,
        principal_id: str,
        scope: TeamScope,
    ) -> list[Role]:
        """Roles held by the principal.

        When scope is enabled, the edge's team_id must equal scope.team_id
        and the role's team_id must be NULL or equal to it.
        """
        ...
