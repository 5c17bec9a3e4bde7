"""SQLAlchemyRoleRepository - SQLAlchemy implementation of RoleRepository.

Adapter for hexagonal architecture. Maps between domain Role entities and
RoleModel rows.
"""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.entities import Role
from warden.domain.value_objects import TeamScope
from warden.infrastructure.persistence.models import (
    PrincipalRoleModel,
    RoleModel,
    RolePermissionModel,
    scope_key_for,
)
from warden.infrastructure.persistence.repositories.scoping import team_predicate


class SQLAlchemyRoleRepository:
    """SQLAlchemy implementation of RoleRepository protocol.

    Each write commits its own transaction. Uniqueness is enforced by the
    uq_roles_name_guard_scope index: a losing concurrent insert surfaces as
    IntegrityError, which is rolled back and reported as None.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with db.get_session() as session:
        ...     repo = SQLAlchemyRoleRepository(session)
        ...     role = await repo.find(name="editor", guard_name="web", scope=scope)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def find(
        self,
        *,
        guard_name: str,
        scope: TeamScope,
        name: str | None = None,
        role_id: UUID | None = None,
    ) -> Role | None:
        """Find one role visible in scope."""
        stmt = select(RoleModel).where(
            RoleModel.guard_name == guard_name,
            team_predicate(RoleModel.team_id, scope),
        )
        if name is not None:
            stmt = stmt.where(RoleModel.name == name)
        if role_id is not None:
            stmt = stmt.where(RoleModel.id == role_id)

        result = await self.session.execute(stmt.limit(1))
        role_model = result.scalar_one_or_none()
        if role_model is None:
            return None
        return self._to_domain(role_model)

    async def find_many(
        self, role_ids: Collection[UUID], *, scope: TeamScope
    ) -> list[Role]:
        """Return roles among role_ids visible in scope."""
        if not role_ids:
            return []
        stmt = select(RoleModel).where(
            RoleModel.id.in_(list(role_ids)),
            team_predicate(RoleModel.team_id, scope),
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars()]

    async def list_all(
        self, *, scope: TeamScope, guard_name: str | None = None
    ) -> list[Role]:
        """List roles visible in scope, ordered by name."""
        stmt = select(RoleModel).where(team_predicate(RoleModel.team_id, scope))
        if guard_name is not None:
            stmt = stmt.where(RoleModel.guard_name == guard_name)
        result = await self.session.execute(stmt.order_by(RoleModel.name))
        return [self._to_domain(model) for model in result.scalars()]

    async def insert_if_absent(self, role: Role) -> Role | None:
        """Insert role; None if the uniqueness key is already taken."""
        role_model = self._to_model(role)
        self.session.add(role_model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return None
        return self._to_domain(role_model)

    async def rename(self, role: Role) -> bool:
        """Persist the new name; False on uniqueness violation or missing row."""
        role_model = await self.session.get(RoleModel, role.id)
        if role_model is None:
            return False

        role_model.name = role.name
        role_model.updated_at = role.updated_at
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def delete_cascade(self, role_id: UUID) -> bool:
        """Delete role and every edge referencing it in one transaction."""
        await self.session.execute(
            delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
        )
        await self.session.execute(
            delete(PrincipalRoleModel).where(PrincipalRoleModel.role_id == role_id)
        )
        result = await self.session.execute(
            delete(RoleModel).where(RoleModel.id == role_id)
        )
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def _to_domain(self, role_model: RoleModel) -> Role:
        """Convert database model to domain entity."""
        return Role(
            id=role_model.id,
            name=role_model.name,
            guard_name=role_model.guard_name,
            team_id=role_model.team_id,
            created_at=role_model.created_at,
            updated_at=role_model.updated_at,
        )

    def _to_model(self, role: Role) -> RoleModel:
        """Convert domain entity to database model."""
        return RoleModel(
            id=role.id,
            name=role.name,
            guard_name=role.guard_name,
            team_id=role.team_id,
            scope_key=scope_key_for(role.team_id),
            created_at=role.created_at,
            updated_at=role.updated_at,
        )
