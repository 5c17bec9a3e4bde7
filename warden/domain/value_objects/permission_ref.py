"""Permission reference tagged union.

A permission check may name the permission, give its id, or pass an already
loaded Permission. Callers may pass raw values; as_permission_ref() turns
them into one of the three variants so resolvers can pattern-match.

Usage:
    match as_permission_ref(value):
        case ByName(name=name):
            ...
        case ById(permission_id=permission_id):
            ...
        case Resolved(permission=permission):
            ...
"""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.entities import Permission


@dataclass(frozen=True, slots=True)
class ByName:
    """Permission referenced by name."""

    name: str


@dataclass(frozen=True, slots=True)
class ById:
    """Permission referenced by id."""

    permission_id: UUID


@dataclass(frozen=True, slots=True)
class Resolved:
    """Permission already loaded from the store."""

    permission: Permission


type PermissionRef = ByName | ById | Resolved

type PermissionLike = PermissionRef | Permission | UUID | str


def as_permission_ref(value: PermissionLike) -> PermissionRef:
    """Normalize a raw permission argument into a PermissionRef.

    Args:
        value: A PermissionRef, a Permission, a UUID or a name.

    Returns:
        The matching PermissionRef variant.

    Raises:
        TypeError: If value is none of the accepted types.
    """
    match value:
        case ByName() | ById() | Resolved():
            return value
        case Permission():
            return Resolved(value)
        case UUID():
            return ById(value)
        case str():
            return ByName(value)
    raise TypeError(f"Unsupported permission reference: {type(value).__name__}")
