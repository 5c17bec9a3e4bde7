"""Assignment graph: Role↔Permission and Principal↔Role edges.

Edges hold ids only. Every edge mutation is idempotent and publishes an event
only when an edge actually changed, so the permission cache is flushed
exactly when cached data became stale.

Guard rules:
    - A permission can only be attached to a role of the same guard.
    - A role can only be assigned to a principal that accepts its guard.

Team rules (teams enabled):
    - Principal↔Role edges are stamped with the current team context.
    - roles_of(), remove_role() and sync_roles() see only edges stamped with
      exactly the current team; the role record itself may be global.
"""

from collections.abc import Iterable
from uuid import UUID

from warden.application.services.guard_resolver import GuardResolver
from warden.application.services.team_scope import TeamScopeResolver
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, NotFoundError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Permission, Role
from warden.domain.events import (
    PermissionAttached,
    PermissionDetached,
    RoleAssigned,
    RoleRemoved,
)
from warden.domain.protocols.assignment_repository import AssignmentRepository
from warden.domain.protocols.event_bus_protocol import EventBusProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.permission_repository import PermissionRepository
from warden.domain.protocols.principal_protocol import PrincipalProtocol
from warden.domain.protocols.role_repository import RoleRepository

type RoleLike = Role | UUID | str
"""A role given as entity, id, or name (looked up under the principal's guard)."""


class AssignmentGraph:
    """Application service owning the two edge sets.

    Dependencies (injected via constructor):
        - RoleRepository / PermissionRepository: endpoint lookups
        - AssignmentRepository: edge persistence
        - GuardResolver: guard checks
        - TeamScopeResolver: team stamping and scoping
        - EventBusProtocol: edge events
        - LoggerProtocol: structured logging
    """

    def __init__(
        self,
        roles: RoleRepository,
        permissions: PermissionRepository,
        assignments: AssignmentRepository,
        guards: GuardResolver,
        teams: TeamScopeResolver,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._roles = roles
        self._permissions = permissions
        self._assignments = assignments
        self._guards = guards
        self._teams = teams
        self._event_bus = event_bus
        self._logger = logger.bind(component="assignment_graph")

    # ═══════════════════════════════════════════════════════════════
    # Role ↔ Permission
    # ═══════════════════════════════════════════════════════════════

    async def attach(
        self, role_id: UUID, permission_id: UUID
    ) -> Result[bool, DomainError]:
        """Give a permission to a role.

        Returns:
            Success(True) if the edge was added, Success(False) if it existed.
            Failure(NotFoundError) for an unknown role or permission.
            Failure(GuardMismatchError) if the guards differ.
        """
        role = await self._visible_role(role_id)
        if isinstance(role, Failure):
            return role
        permissions = await self._existing_permissions([permission_id])
        if isinstance(permissions, Failure):
            return permissions
        permission = permissions.value[0]

        guard_check = self._guards.ensure_guard(
            permission.guard_name, (role.value.guard_name,)
        )
        if isinstance(guard_check, Failure):
            return guard_check

        changed = await self._assignments.attach(role_id, permission_id)
        if changed:
            self._logger.info(
                "permission_attached",
                role_id=str(role_id),
                permission_id=str(permission_id),
            )
            await self._event_bus.publish(
                PermissionAttached(role_id=role_id, permission_id=permission_id)
            )
        return Success(value=changed)

    async def detach(
        self, role_id: UUID, permission_id: UUID
    ) -> Result[bool, DomainError]:
        """Take a permission away from a role.

        Returns:
            Success(True) if the edge was removed, Success(False) if absent.
            Failure(NotFoundError) for an unknown role or permission.
        """
        role = await self._visible_role(role_id)
        if isinstance(role, Failure):
            return role
        permissions = await self._existing_permissions([permission_id])
        if isinstance(permissions, Failure):
            return permissions

        changed = await self._assignments.detach(role_id, permission_id)
        if changed:
            self._logger.info(
                "permission_detached",
                role_id=str(role_id),
                permission_id=str(permission_id),
            )
            await self._event_bus.publish(
                PermissionDetached(role_id=role_id, permission_id=permission_id)
            )
        return Success(value=changed)

    async def sync_permissions(
        self, role_id: UUID, permission_ids: Iterable[UUID]
    ) -> Result[bool, DomainError]:
        """Make permission_ids the role's exact permission set.

        All ids are validated before anything is written.

        Returns:
            Success(True) if any edge changed.
        """
        role = await self._visible_role(role_id)
        if isinstance(role, Failure):
            return role
        wanted = list(dict.fromkeys(permission_ids))
        permissions = await self._existing_permissions(wanted)
        if isinstance(permissions, Failure):
            return permissions
        for permission in permissions.value:
            guard_check = self._guards.ensure_guard(
                permission.guard_name, (role.value.guard_name,)
            )
            if isinstance(guard_check, Failure):
                return guard_check

        added, removed = await self._assignments.replace_permissions(role_id, wanted)
        for permission_id in added:
            await self._event_bus.publish(
                PermissionAttached(role_id=role_id, permission_id=permission_id)
            )
        for permission_id in removed:
            await self._event_bus.publish(
                PermissionDetached(role_id=role_id, permission_id=permission_id)
            )
        if added or removed:
            self._logger.info(
                "role_permissions_synced",
                role_id=str(role_id),
                added=len(added),
                removed=len(removed),
            )
        return Success(value=bool(added or removed))

    async def permissions_of(self, role_id: UUID) -> frozenset[Permission]:
        """Permissions attached to a role."""
        return frozenset(await self._assignments.permissions_of([role_id]))

    # ═══════════════════════════════════════════════════════════════
    # Principal ↔ Role
    # ═══════════════════════════════════════════════════════════════

    async def assign_role(
        self, principal: PrincipalProtocol, role: RoleLike
    ) -> Result[bool, DomainError]:
        """Assign a role to a principal within the current team.

        Returns:
            Success(True) if the edge was added, Success(False) if it existed.
            Failure(NotFoundError) for an unknown role.
            Failure(GuardMismatchError) if the principal does not accept the
                role's guard.
        """
        resolved = await self._resolve_assignable(principal, role)
        if isinstance(resolved, Failure):
            return resolved
        target = resolved.value
        team_id = self._teams.default_team_id()

        changed = await self._assignments.assign(
            principal.principal_type, principal.principal_id, target.id, team_id
        )
        if changed:
            self._logger.info(
                "role_assigned",
                principal_type=principal.principal_type,
                principal_id=principal.principal_id,
                role_id=str(target.id),
                team_id=str(team_id) if team_id else None,
            )
            await self._event_bus.publish(
                RoleAssigned(
                    principal_type=principal.principal_type,
                    principal_id=principal.principal_id,
                    role_id=target.id,
                    team_id=team_id,
                )
            )
        return Success(value=changed)

    async def remove_role(
        self, principal: PrincipalProtocol, role: RoleLike
    ) -> Result[bool, DomainError]:
        """Remove a role from a principal within the current team.

        Returns:
            Success(True) if the edge was removed, Success(False) if absent.
            Failure(NotFoundError) for an unknown role.
        """
        resolved = await self._resolve_role(principal, role)
        if isinstance(resolved, Failure):
            return resolved
        target = resolved.value
        team_id = self._teams.default_team_id()

        changed = await self._assignments.unassign(
            principal.principal_type, principal.principal_id, target.id, team_id
        )
        if changed:
            self._logger.info(
                "role_removed",
                principal_type=principal.principal_type,
                principal_id=principal.principal_id,
                role_id=str(target.id),
            )
            await self._event_bus.publish(
                RoleRemoved(
                    principal_type=principal.principal_type,
                    principal_id=principal.principal_id,
                    role_id=target.id,
                    team_id=team_id,
                )
            )
        return Success(value=changed)

    async def sync_roles(
        self, principal: PrincipalProtocol, roles: Iterable[RoleLike]
    ) -> Result[bool, DomainError]:
        """Make roles the principal's exact role set within the current team.

        All roles are resolved and guard-checked before anything is written.

        Returns:
            Success(True) if any edge changed.
        """
        wanted: dict[UUID, Role] = {}
        for role in roles:
            resolved = await self._resolve_assignable(principal, role)
            if isinstance(resolved, Failure):
                return resolved
            wanted[resolved.value.id] = resolved.value
        team_id = self._teams.default_team_id()

        added, removed = await self._assignments.replace_roles(
            principal.principal_type, principal.principal_id, list(wanted), team_id
        )
        for role_id in added:
            await self._event_bus.publish(
                RoleAssigned(
                    principal_type=principal.principal_type,
                    principal_id=principal.principal_id,
                    role_id=role_id,
                    team_id=team_id,
                )
            )
        for role_id in removed:
            await self._event_bus.publish(
                RoleRemoved(
                    principal_type=principal.principal_type,
                    principal_id=principal.principal_id,
                    role_id=role_id,
                    team_id=team_id,
                )
            )
        if added or removed:
            self._logger.info(
                "principal_roles_synced",
                principal_type=principal.principal_type,
                principal_id=principal.principal_id,
                added=len(added),
                removed=len(removed),
            )
        return Success(value=bool(added or removed))

    async def roles_of(self, principal: PrincipalProtocol) -> frozenset[Role]:
        """Roles the principal holds in the current team context."""
        return frozenset(
            await self._assignments.roles_of(
                principal.principal_type,
                principal.principal_id,
                self._teams.scope(),
            )
        )

    async def granted_permissions(
        self, principal: PrincipalProtocol
    ) -> frozenset[Permission]:
        """Union of the permissions of every role the principal holds."""
        held = await self.roles_of(principal)
        if not held:
            return frozenset()
        return frozenset(
            await self._assignments.permissions_of([role.id for role in held])
        )

    async def principal_has_role(
        self, principal: PrincipalProtocol, role: RoleLike
    ) -> bool:
        """Whether the principal holds role in the current team context.

        A name matches any held role with that name under one of the
        principal's acceptable guards.
        """
        held = await self.roles_of(principal)
        match role:
            case Role(id=role_id):
                return any(candidate.id == role_id for candidate in held)
            case UUID():
                return any(candidate.id == role for candidate in held)
            case str():
                guards = self._guards.guard_names(principal)
                return any(
                    candidate.name == role and candidate.guard_name in guards
                    for candidate in held
                )
        return False

    # ═══════════════════════════════════════════════════════════════
    # Helpers
    # ═══════════════════════════════════════════════════════════════

    async def _visible_role(self, role_id: UUID) -> Result[Role, DomainError]:
        found = await self._roles.find_many([role_id], scope=self._teams.scope())
        if not found:
            return Failure(error=_role_not_found(role_id))
        return Success(value=found[0])

    async def _existing_permissions(
        self, permission_ids: list[UUID]
    ) -> Result[list[Permission], DomainError]:
        found = {p.id: p for p in await self._permissions.find_many(permission_ids)}
        for permission_id in permission_ids:
            if permission_id not in found:
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.PERMISSION_NOT_FOUND,
                        message=f"There is no permission with id `{permission_id}`.",
                        resource_type="Permission",
                        resource_id=str(permission_id),
                    )
                )
        return Success(value=[found[pid] for pid in permission_ids])

    async def _resolve_role(
        self, principal: PrincipalProtocol, role: RoleLike
    ) -> Result[Role, DomainError]:
        match role:
            case Role(id=role_id):
                return await self._visible_role(role_id)
            case UUID():
                return await self._visible_role(role)
            case str():
                guard = self._guards.default_guard_name(principal)
                found = await self._roles.find(
                    guard_name=guard, scope=self._teams.scope(), name=role
                )
                if found is None:
                    return Failure(error=_role_not_found(role, guard))
                return Success(value=found)
        raise TypeError(f"Unsupported role reference: {type(role).__name__}")

    async def _resolve_assignable(
        self, principal: PrincipalProtocol, role: RoleLike
    ) -> Result[Role, DomainError]:
        resolved = await self._resolve_role(principal, role)
        if isinstance(resolved, Failure):
            return resolved
        guard_check = self._guards.ensure_guard(
            resolved.value.guard_name, self._guards.guard_names(principal)
        )
        if isinstance(guard_check, Failure):
            return guard_check
        return resolved


def _role_not_found(key: object, guard_name: str | None = None) -> NotFoundError:
    where = f" for guard `{guard_name}`" if guard_name else ""
    return NotFoundError(
        code=ErrorCode.ROLE_NOT_FOUND,
        message=f"There is no role `{key}`{where}.",
        resource_type="Role",
        resource_id=str(key),
    )
