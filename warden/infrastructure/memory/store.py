"""In-memory role/permission storage.

Concrete implementation of the three repository protocols over plain dicts.
No external dependencies: used by the unit tests and by single-process
deployments that do not need durability.

Design Pattern:
    - One InMemoryRegistry holds all records and edges
    - Each repository is a thin view over the shared registry
    - Every mutation runs under the registry's asyncio.Lock, which makes
      insert_if_absent and delete_cascade atomic units, like a database
      transaction with a unique index would

Usage:
    registry = InMemoryRegistry()
    roles = InMemoryRoleRepository(registry)
    permissions = InMemoryPermissionRepository(registry)
    assignments = InMemoryAssignmentRepository(registry)

Note:
    State is lost on restart and not shared across processes.
"""

import asyncio
from collections.abc import Collection
from dataclasses import dataclass, field
from uuid import UUID

from warden.domain.entities import Permission, Role
from warden.domain.protocols.assignment_repository import EdgeDiff
from warden.domain.value_objects import TeamScope

type PrincipalEdge = tuple[str, str, UUID, UUID | None]
"""(principal_type, principal_id, role_id, team_id)"""


@dataclass
class InMemoryRegistry:
    """Shared state behind the in-memory repositories."""

    roles: dict[UUID, Role] = field(default_factory=dict)
    permissions: dict[UUID, Permission] = field(default_factory=dict)
    role_permissions: set[tuple[UUID, UUID]] = field(default_factory=set)
    principal_roles: set[PrincipalEdge] = field(default_factory=set)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def clear(self) -> None:
        """Drop every record and edge. Useful for testing."""
        self.roles.clear()
        self.permissions.clear()
        self.role_permissions.clear()
        self.principal_roles.clear()


class InMemoryRoleRepository:
    """Dict-backed implementation of the RoleRepository protocol."""

    def __init__(self, registry: InMemoryRegistry) -> None:
        self._registry = registry

    async def find(
        self,
        *,
        guard_name: str,
        scope: TeamScope,
        name: str | None = None,
        role_id: UUID | None = None,
    ) -> Role | None:
        for role in self._registry.roles.values():
            if role.guard_name != guard_name or not scope.admits(role.team_id):
                continue
            if name is not None and role.name != name:
                continue
            if role_id is not None and role.id != role_id:
                continue
            return role
        return None

    async def find_many(
        self, role_ids: Collection[UUID], *, scope: TeamScope
    ) -> list[Role]:
        return [
            role
            for role_id in role_ids
            if (role := self._registry.roles.get(role_id)) is not None
            and scope.admits(role.team_id)
        ]

    async def list_all(
        self, *, scope: TeamScope, guard_name: str | None = None
    ) -> list[Role]:
        roles = [
            role
            for role in self._registry.roles.values()
            if scope.admits(role.team_id)
            and (guard_name is None or role.guard_name == guard_name)
        ]
        return sorted(roles, key=lambda role: role.name)

    async def insert_if_absent(self, role: Role) -> Role | None:
        async with self._registry.lock:
            # Yield inside the critical section so racing callers really interleave.
            await asyncio.sleep(0)
            if self._key_taken(role):
                return None
            self._registry.roles[role.id] = role
            return role

    async def rename(self, role: Role) -> bool:
        async with self._registry.lock:
            if role.id not in self._registry.roles or self._key_taken(role):
                return False
            self._registry.roles[role.id] = role
            return True

    async def delete_cascade(self, role_id: UUID) -> bool:
        registry = self._registry
        async with registry.lock:
            if registry.roles.pop(role_id, None) is None:
                return False
            registry.role_permissions = {
                edge for edge in registry.role_permissions if edge[0] != role_id
            }
            registry.principal_roles = {
                edge for edge in registry.principal_roles if edge[2] != role_id
            }
            return True

    def _key_taken(self, role: Role) -> bool:
        return any(
            other.id != role.id
            and other.name == role.name
            and other.guard_name == role.guard_name
            and other.team_id == role.team_id
            for other in self._registry.roles.values()
        )


class InMemoryPermissionRepository:
    """Dict-backed implementation of the PermissionRepository protocol."""

    def __init__(self, registry: InMemoryRegistry) -> None:
        self._registry = registry

    async def find(
        self,
        *,
        guard_name: str,
        name: str | None = None,
        permission_id: UUID | None = None,
    ) -> Permission | None:
        for permission in self._registry.permissions.values():
            if permission.guard_name != guard_name:
                continue
            if name is not None and permission.name != name:
                continue
            if permission_id is not None and permission.id != permission_id:
                continue
            return permission
        return None

    async def find_many(self, permission_ids: Collection[UUID]) -> list[Permission]:
        permissions = self._registry.permissions
        return [permissions[pid] for pid in permission_ids if pid in permissions]

    async def list_all(self, *, guard_name: str | None = None) -> list[Permission]:
        found = [
            permission
            for permission in self._registry.permissions.values()
            if guard_name is None or permission.guard_name == guard_name
        ]
        return sorted(found, key=lambda permission: permission.name)

    async def insert_if_absent(self, permission: Permission) -> Permission | None:
        async with self._registry.lock:
            await asyncio.sleep(0)
            if self._key_taken(permission):
                return None
            self._registry.permissions[permission.id] = permission
            return permission

    async def rename(self, permission: Permission) -> bool:
        async with self._registry.lock:
            if (
                permission.id not in self._registry.permissions
                or self._key_taken(permission)
            ):
                return False
            self._registry.permissions[permission.id] = permission
            return True

    async def delete_cascade(self, permission_id: UUID) -> bool:
        registry = self._registry
        async with registry.lock:
            if registry.permissions.pop(permission_id, None) is None:
                return False
            registry.role_permissions = {
                edge for edge in registry.role_permissions if edge[1] != permission_id
            }
            return True

    def _key_taken(self, permission: Permission) -> bool:
        return any(
            other.id != permission.id
            and other.name == permission.name
            and other.guard_name == permission.guard_name
            for other in self._registry.permissions.values()
        )


class InMemoryAssignmentRepository:
    """Set-backed implementation of the AssignmentRepository protocol."""

    def __init__(self, registry: InMemoryRegistry) -> None:
        self._registry = registry

    async def attach(self, role_id: UUID, permission_id: UUID) -> bool:
        async with self._registry.lock:
            edge = (role_id, permission_id)
            if edge in self._registry.role_permissions:
                return False
            self._registry.role_permissions.add(edge)
            return True

    async def detach(self, role_id: UUID, permission_id: UUID) -> bool:
        async with self._registry.lock:
            edge = (role_id, permission_id)
            if edge not in self._registry.role_permissions:
                return False
            self._registry.role_permissions.discard(edge)
            return True

    async def replace_permissions(
        self, role_id: UUID, permission_ids: Collection[UUID]
    ) -> EdgeDiff:
        registry = self._registry
        async with registry.lock:
            current = {pid for rid, pid in registry.role_permissions if rid == role_id}
            wanted = set(permission_ids)
            registry.role_permissions -= {(role_id, pid) for pid in current - wanted}
            registry.role_permissions |= {(role_id, pid) for pid in wanted - current}
            return frozenset(wanted - current), frozenset(current - wanted)

    async def permissions_of(self, role_ids: Collection[UUID]) -> list[Permission]:
        wanted = set(role_ids)
        permission_ids = {
            pid for rid, pid in self._registry.role_permissions if rid in wanted
        }
        permissions = self._registry.permissions
        return [permissions[pid] for pid in permission_ids if pid in permissions]

    async def assign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        async with self._registry.lock:
            edge = (principal_type, principal_id, role_id, team_id)
            if edge in self._registry.principal_roles:
                return False
            self._registry.principal_roles.add(edge)
            return True

    async def unassign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        async with self._registry.lock:
            edge = (principal_type, principal_id, role_id, team_id)
            if edge not in self._registry.principal_roles:
                return False
            self._registry.principal_roles.discard(edge)
            return True

    async def replace_roles(
        self,
        principal_type: str,
        principal_id: str,
        role_ids: Collection[UUID],
        team_id: UUID | None,
    ) -> EdgeDiff:
        registry = self._registry
        async with registry.lock:
            current = {
                rid
                for kind, pid, rid, tid in registry.principal_roles
                if kind == principal_type and pid == principal_id and tid == team_id
            }
            wanted = set(role_ids)
            registry.principal_roles -= {
                (principal_type, principal_id, rid, team_id) for rid in current - wanted
            }
            registry.principal_roles |= {
                (principal_type, principal_id, rid, team_id) for rid in wanted - current
            }
            return frozenset(wanted - current), frozenset(current - wanted)

    async def roles_of(
        self,
        principal_type: str,
        principal_id: str,
        scope: TeamScope,
    ) -> list[Role]:
        roles = self._registry.roles
        held = {
            role_id
            for kind, pid, role_id, team_id in self._registry.principal_roles
            if kind == principal_type and pid == principal_id and scope.owns(team_id)
        }
        return [
            roles[role_id]
            for role_id in held
            if role_id in roles and scope.admits(roles[role_id].team_id)
        ]
