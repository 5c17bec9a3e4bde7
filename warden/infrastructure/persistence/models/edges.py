"""Edge tables for role↔permission and principal↔role assignments.

Edges hold foreign ids only. Cascading deletes are issued explicitly by the
repositories inside the same transaction as the entity delete; the
ON DELETE CASCADE clauses are a second line for direct SQL deletes.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.base import BaseModel


class RolePermissionModel(BaseModel):
    """role_has_permissions table."""

    __tablename__ = "role_has_permissions"

    role_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )
    permission_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
        Index("ix_role_has_permissions_permission_id", "permission_id"),
    )


class PrincipalRoleModel(BaseModel):
    """principal_has_roles table.

    scope_key mirrors RoleModel.scope_key so an assignment is unique per
    (principal, role, team) even when team_id is NULL.
    """

    __tablename__ = "principal_has_roles"

    principal_type: Mapped[str] = mapped_column(String(255), nullable=False)
    principal_id: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )
    team_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    scope_key: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    __table_args__ = (
        UniqueConstraint(
            "principal_type",
            "principal_id",
            "role_id",
            "scope_key",
            name="uq_principal_role_scope",
        ),
        Index("ix_principal_has_roles_principal", "principal_type", "principal_id"),
    )
