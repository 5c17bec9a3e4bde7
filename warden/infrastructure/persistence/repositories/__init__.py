"""SQLAlchemy repository adapters."""

from warden.infrastructure.persistence.repositories.assignment_repository import (
    SQLAlchemyAssignmentRepository,
)
from warden.infrastructure.persistence.repositories.permission_repository import (
    SQLAlchemyPermissionRepository,
)
from warden.infrastructure.persistence.repositories.role_repository import (
    SQLAlchemyRoleRepository,
)

__all__ = [
    "SQLAlchemyAssignmentRepository",
    "SQLAlchemyPermissionRepository",
    "SQLAlchemyRoleRepository",
]
