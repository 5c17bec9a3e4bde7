"""Domain value objects.

Usage:
    from warden.domain.value_objects import PrincipalRef, TeamScope, ByName
"""

from warden.domain.value_objects.permission_config import PermissionConfig
from warden.domain.value_objects.permission_ref import (
    ById,
    ByName,
    PermissionLike,
    PermissionRef,
    Resolved,
    as_permission_ref,
)
from warden.domain.value_objects.principal_ref import PrincipalRef
from warden.domain.value_objects.team_scope import UNSET, TeamScope, Unset

__all__ = [
    "ById",
    "ByName",
    "PermissionConfig",
    "PermissionLike",
    "PermissionRef",
    "PrincipalRef",
    "Resolved",
    "TeamScope",
    "UNSET",
    "Unset",
    "as_permission_ref",
]
