"""Application services.

Usage:
    from warden.application.services import RoleStore, PermissionResolver
"""

from warden.application.services.assignment_graph import AssignmentGraph, RoleLike
from warden.application.services.guard_resolver import GuardResolver
from warden.application.services.permission_resolver import PermissionResolver
from warden.application.services.permission_store import PermissionStore
from warden.application.services.role_store import RoleStore
from warden.application.services.team_scope import TeamScopeResolver

__all__ = [
    "AssignmentGraph",
    "GuardResolver",
    "PermissionResolver",
    "PermissionStore",
    "RoleLike",
    "RoleStore",
    "TeamScopeResolver",
]
