"""Role database model.

Uniqueness:
    (name, guard_name, scope_key) is unique. scope_key is the owning team id
    as text, or "" for global roles. NULL team ids compare as distinct in a
    plain unique index on most databases, so this non-null discriminator is
    what makes two global roles with the same name collide.
"""

from uuid import UUID

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.base import BaseMutableModel

GLOBAL_SCOPE_KEY = ""


def scope_key_for(team_id: UUID | None) -> str:
    """Return the non-null uniqueness discriminator for a team id."""
    return GLOBAL_SCOPE_KEY if team_id is None else str(team_id)


class RoleModel(BaseMutableModel):
    """Role table.

    Fields:
        name: Role name.
        guard_name: Guard the role is valid under.
        team_id: Owning team (NULL for global roles).
        scope_key: Uniqueness discriminator derived from team_id.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    guard_name: Mapped[str] = mapped_column(String(255), nullable=False)
    team_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    scope_key: Mapped[str] = mapped_column(
        String(64), nullable=False, default=GLOBAL_SCOPE_KEY
    )

    __table_args__ = (
        Index(
            "uq_roles_name_guard_scope",
            "name",
            "guard_name",
            "scope_key",
            unique=True,
        ),
    )
