"""PermissionRepository protocol for permission persistence.

Port (interface) for hexagonal architecture. Permissions are never team
scoped, so no TeamScope is involved.
"""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from warden.domain.entities import Permission


class PermissionRepository(Protocol):
    """Permission repository protocol (port).

    Methods:
        find: Lookup by name and/or id under a guard
        find_many: Lookup of several ids
        list_all: Listing, optionally by guard
        insert_if_absent: Atomic create-if-absent on (name, guard_name)
        rename: Update name, respecting uniqueness
        delete_cascade: Delete permission and its role edges atomically
    """

    async def find(
        self,
        *,
        guard_name: str,
        name: str | None = None,
        permission_id: UUID | None = None,
    ) -> Permission | None:
        """Find one permission.

        Returns:
            Permission if found, None otherwise.
        """
        ...

    async def find_many(self, permission_ids: Collection[UUID]) -> list[Permission]:
        """Return the permissions among permission_ids that exist."""
        ...

    async def list_all(self, *, guard_name: str | None = None) -> list[Permission]:
        """List permissions ordered by name."""
        ...

    async def insert_if_absent(self, permission: Permission) -> Permission | None:
        """Insert permission unless (name, guard_name) is taken.

        Returns:
            The stored permission, or None if the key already exists.
        """
        ...

    async def rename(self, permission: Permission) -> bool:
        """Persist permission.name and permission.updated_at.

        Returns:
            True if saved, False if the new name violates uniqueness.
        """
        ...

    async def delete_cascade(self, permission_id: UUID) -> bool:
        """Delete permission plus its role edges in one unit.

        Returns:
            True if a permission was deleted, False if none existed.
        """
        ...
