"""RoleRepository protocol for role persistence.

Port (interface) for hexagonal architecture. Infrastructure provides the
SQLAlchemy and in-memory adapters.
"""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from warden.domain.entities import Role
from warden.domain.value_objects import TeamScope


class RoleRepository(Protocol):
    """Role repository protocol (port).

    Lookups apply the TeamScope predicate (team_id IS NULL OR team_id = scope)
    when the scope is enabled. Writes are atomic against the uniqueness key
    (name, guard_name, team_id).

    Methods:
        find: Scoped lookup by name and/or id
        find_many: Scoped lookup of several ids
        list_all: Scoped listing, optionally by guard
        insert_if_absent: Atomic create-if-absent
        rename: Update name, respecting uniqueness
        delete_cascade: Delete role and all its edges atomically
    """

    async def find(
        self,
        *,
        guard_name: str,
        scope: TeamScope,
        name: str | None = None,
        role_id: UUID | None = None,
    ) -> Role | None:
        """Find one role visible in scope.

        Args:
            guard_name: Guard to match exactly.
            scope: Team scope predicate.
            name: Name to match exactly (optional).
            role_id: Id to match exactly (optional).

        Returns:
            Role if found, None otherwise.
        """
        ...

    async def find_many(
        self, role_ids: Collection[UUID], *, scope: TeamScope
    ) -> list[Role]:
        """Return the roles among role_ids that are visible in scope."""
        ...

    async def list_all(
        self, *, scope: TeamScope, guard_name: str | None = None
    ) -> list[Role]:
        """List roles visible in scope, ordered by name."""
        ...

    async def insert_if_absent(self, role: Role) -> Role | None:
        """Insert role unless its exact uniqueness key is taken.

        Must be atomic: of two concurrent inserts with the same
        (name, guard_name, team_id) exactly one succeeds.

        Returns:
            The stored role, or None if the key already exists.
        """
        ...

    async def rename(self, role: Role) -> bool:
        """Persist role.name and role.updated_at.

        Returns:
            True if saved, False if the new name violates uniqueness.
        """
        ...

    async def delete_cascade(self, role_id: UUID) -> bool:
        """Delete role plus its permission and principal edges in one unit.

        Returns:
            True if a role was deleted, False if none existed.
        """
        ...
