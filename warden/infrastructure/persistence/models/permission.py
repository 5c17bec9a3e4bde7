"""Permission database model.

Permissions are shared across teams, so uniqueness is (name, guard_name).
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.base import BaseMutableModel


class PermissionModel(BaseMutableModel):
    """Permission table."""

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    guard_name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("name", "guard_name", name="uq_permissions_name_guard"),
    )
