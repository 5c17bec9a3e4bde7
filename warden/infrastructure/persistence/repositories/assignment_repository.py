"""SQLAlchemyAssignmentRepository - SQLAlchemy implementation of AssignmentRepository.

Owns the role_has_permissions and principal_has_roles edge tables. Edge
inserts rely on their unique constraints for idempotency: a duplicate insert
is rolled back and reported as "nothing changed".
"""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.entities import Permission, Role
from warden.domain.protocols.assignment_repository import EdgeDiff
from warden.domain.value_objects import TeamScope
from warden.infrastructure.persistence.models import (
    PermissionModel,
    PrincipalRoleModel,
    RoleModel,
    RolePermissionModel,
    scope_key_for,
)
from warden.infrastructure.persistence.repositories.scoping import (
    edge_team_predicate,
    team_predicate,
)


class SQLAlchemyAssignmentRepository:
    """SQLAlchemy implementation of AssignmentRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    # Role ↔ Permission

    async def attach(self, role_id: UUID, permission_id: UUID) -> bool:
        """Insert a role→permission edge; False if it already existed."""
        self.session.add(RolePermissionModel(role_id=role_id, permission_id=permission_id))
        return await self._commit_insert()

    async def detach(self, role_id: UUID, permission_id: UUID) -> bool:
        """Remove a role→permission edge; False if it was absent."""
        result = await self.session.execute(
            delete(RolePermissionModel).where(
                RolePermissionModel.role_id == role_id,
                RolePermissionModel.permission_id == permission_id,
            )
        )
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def replace_permissions(
        self, role_id: UUID, permission_ids: Collection[UUID]
    ) -> EdgeDiff:
        """Make permission_ids the exact permission set of role_id."""
        result = await self.session.execute(
            select(RolePermissionModel.permission_id).where(
                RolePermissionModel.role_id == role_id
            )
        )
        current = set(result.scalars())
        wanted = set(permission_ids)
        if stale := current - wanted:
            await self.session.execute(
                delete(RolePermissionModel).where(
                    RolePermissionModel.role_id == role_id,
                    RolePermissionModel.permission_id.in_(stale),
                )
            )
        self.session.add_all(
            RolePermissionModel(role_id=role_id, permission_id=permission_id)
            for permission_id in wanted - current
        )
        await self.session.commit()
        return frozenset(wanted - current), frozenset(stale)

    async def permissions_of(self, role_ids: Collection[UUID]) -> list[Permission]:
        """Distinct permissions held by any of role_ids."""
        if not role_ids:
            return []
        stmt = (
            select(PermissionModel)
            .join(
                RolePermissionModel,
                RolePermissionModel.permission_id == PermissionModel.id,
            )
            .where(RolePermissionModel.role_id.in_(list(role_ids)))
            .distinct()
        )
        result = await self.session.execute(stmt)
        return [
            Permission(
                id=model.id,
                name=model.name,
                guard_name=model.guard_name,
                created_at=model.created_at,
                updated_at=model.updated_at,
            )
            for model in result.scalars()
        ]

    # Principal ↔ Role

    async def assign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        """Insert a principal→role edge; False if it already existed."""
        self.session.add(
            PrincipalRoleModel(
                principal_type=principal_type,
                principal_id=principal_id,
                role_id=role_id,
                team_id=team_id,
                scope_key=scope_key_for(team_id),
            )
        )
        return await self._commit_insert()

    async def unassign(
        self,
        principal_type: str,
        principal_id: str,
        role_id: UUID,
        team_id: UUID | None,
    ) -> bool:
        """Remove the principal→role edge stamped with team_id."""
        result = await self.session.execute(
            delete(PrincipalRoleModel).where(
                PrincipalRoleModel.principal_type == principal_type,
                PrincipalRoleModel.principal_id == principal_id,
                PrincipalRoleModel.role_id == role_id,
                PrincipalRoleModel.scope_key == scope_key_for(team_id),
            )
        )
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def replace_roles(
        self,
        principal_type: str,
        principal_id: str,
        role_ids: Collection[UUID],
        team_id: UUID | None,
    ) -> EdgeDiff:
        """Make role_ids the exact role set of the principal within team_id."""
        scope_key = scope_key_for(team_id)
        owned = (
            PrincipalRoleModel.principal_type == principal_type,
            PrincipalRoleModel.principal_id == principal_id,
            PrincipalRoleModel.scope_key == scope_key,
        )
        result = await self.session.execute(
            select(PrincipalRoleModel.role_id).where(*owned)
        )
        current = set(result.scalars())
        wanted = set(role_ids)
        if stale := current - wanted:
            await self.session.execute(
                delete(PrincipalRoleModel).where(
                    *owned, PrincipalRoleModel.role_id.in_(stale)
                )
            )
        self.session.add_all(
            PrincipalRoleModel(
                principal_type=principal_type,
                principal_id=principal_id,
                role_id=role_id,
                team_id=team_id,
                scope_key=scope_key,
            )
            for role_id in wanted - current
        )
        await self.session.commit()
        return frozenset(wanted - current), frozenset(stale)

    async def roles_of(
        self,
        principal_type: str,
        principal_id: str,
        scope: TeamScope,
    ) -> list[Role]:
        """Distinct roles held by the principal in the exact team, role NULL-or-match."""
        stmt = (
            select(RoleModel)
            .join(PrincipalRoleModel, PrincipalRoleModel.role_id == RoleModel.id)
            .where(
                PrincipalRoleModel.principal_type == principal_type,
                PrincipalRoleModel.principal_id == principal_id,
                edge_team_predicate(PrincipalRoleModel.team_id, scope),
                team_predicate(RoleModel.team_id, scope),
            )
            .distinct()
        )
        result = await self.session.execute(stmt)
        return [
            Role(
                id=model.id,
                name=model.name,
                guard_name=model.guard_name,
                team_id=model.team_id,
                created_at=model.created_at,
                updated_at=model.updated_at,
            )
            for model in result.scalars()
        ]

    async def _commit_insert(self) -> bool:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True
