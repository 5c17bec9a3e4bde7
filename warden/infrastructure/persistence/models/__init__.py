"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from warden.infrastructure.persistence.models.edges import (
    PrincipalRoleModel,
    RolePermissionModel,
)
from warden.infrastructure.persistence.models.permission import PermissionModel
from warden.infrastructure.persistence.models.role import (
    GLOBAL_SCOPE_KEY,
    RoleModel,
    scope_key_for,
)

__all__ = [
    "GLOBAL_SCOPE_KEY",
    "PermissionModel",
    "PrincipalRoleModel",
    "RoleModel",
    "RolePermissionModel",
    "scope_key_for",
]
