"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from warden.domain.protocols import RoleRepository, EventBusProtocol
"""

from warden.domain.protocols.assignment_repository import (
    AssignmentRepository,
    EdgeDiff,
)
from warden.domain.protocols.event_bus_protocol import (
    EventBusProtocol,
    EventHandler,
)
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.permission_cache_protocol import PermissionCacheProtocol
from warden.domain.protocols.permission_repository import PermissionRepository
from warden.domain.protocols.principal_protocol import PrincipalProtocol
from warden.domain.protocols.role_repository import RoleRepository

__all__ = [
    "AssignmentRepository",
    "EdgeDiff",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "PermissionCacheProtocol",
    "PermissionRepository",
    "PrincipalProtocol",
    "RoleRepository",
]
