"""Domain entities.

Usage:
    from warden.domain.entities import Role, Permission
"""

from warden.domain.entities.permission import Permission
from warden.domain.entities.role import Role

__all__ = ["Permission", "Role"]
