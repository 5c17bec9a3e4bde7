"""In-memory repository adapters."""

from warden.infrastructure.memory.store import (
    InMemoryAssignmentRepository,
    InMemoryPermissionRepository,
    InMemoryRegistry,
    InMemoryRoleRepository,
)

__all__ = [
    "InMemoryAssignmentRepository",
    "InMemoryPermissionRepository",
    "InMemoryRegistry",
    "InMemoryRoleRepository",
]
