"""SQLAlchemyPermissionRepository - SQLAlchemy implementation of PermissionRepository.

Adapter for hexagonal architecture. Maps between domain Permission entities
and PermissionModel rows.
"""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.entities import Permission
from warden.infrastructure.persistence.models import (
    PermissionModel,
    RolePermissionModel,
)


class SQLAlchemyPermissionRepository:
    """SQLAlchemy implementation of PermissionRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def find(
        self,
        *,
        guard_name: str,
        name: str | None = None,
        permission_id: UUID | None = None,
    ) -> Permission | None:
        """Find one permission by name and/or id under a guard."""
        stmt = select(PermissionModel).where(PermissionModel.guard_name == guard_name)
        if name is not None:
            stmt = stmt.where(PermissionModel.name == name)
        if permission_id is not None:
            stmt = stmt.where(PermissionModel.id == permission_id)

        result = await self.session.execute(stmt.limit(1))
        permission_model = result.scalar_one_or_none()
        if permission_model is None:
            return None
        return self._to_domain(permission_model)

    async def find_many(self, permission_ids: Collection[UUID]) -> list[Permission]:
        """Return existing permissions among permission_ids."""
        if not permission_ids:
            return []
        stmt = select(PermissionModel).where(
            PermissionModel.id.in_(list(permission_ids))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars()]

    async def list_all(self, *, guard_name: str | None = None) -> list[Permission]:
        """List permissions ordered by name."""
        stmt = select(PermissionModel)
        if guard_name is not None:
            stmt = stmt.where(PermissionModel.guard_name == guard_name)
        result = await self.session.execute(stmt.order_by(PermissionModel.name))
        return [self._to_domain(model) for model in result.scalars()]

    async def insert_if_absent(self, permission: Permission) -> Permission | None:
        """Insert permission; None if (name, guard_name) is already taken."""
        permission_model = self._to_model(permission)
        self.session.add(permission_model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return None
        return self._to_domain(permission_model)

    async def rename(self, permission: Permission) -> bool:
        """Persist the new name; False on uniqueness violation or missing row."""
        permission_model = await self.session.get(PermissionModel, permission.id)
        if permission_model is None:
            return False

        permission_model.name = permission.name
        permission_model.updated_at = permission.updated_at
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    async def delete_cascade(self, permission_id: UUID) -> bool:
        """Delete permission and its role edges in one transaction."""
        await self.session.execute(
            delete(RolePermissionModel).where(
                RolePermissionModel.permission_id == permission_id
            )
        )
        result = await self.session.execute(
            delete(PermissionModel).where(PermissionModel.id == permission_id)
        )
        await self.session.commit()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def _to_domain(self, permission_model: PermissionModel) -> Permission:
        """Convert database model to domain entity."""
        return Permission(
            id=permission_model.id,
            name=permission_model.name,
            guard_name=permission_model.guard_name,
            created_at=permission_model.created_at,
            updated_at=permission_model.updated_at,
        )

    def _to_model(self, permission: Permission) -> PermissionModel:
        """Convert domain entity to database model."""
        return PermissionModel(
            id=permission.id,
            name=permission.name,
            guard_name=permission.guard_name,
            created_at=permission.created_at,
            updated_at=permission.updated_at,
        )
