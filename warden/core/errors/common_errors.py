"""Generic error classes shared by roles and permissions.

Error Types:
- ValidationError: invalid argument (empty name, malformed wildcard pattern)
- NotFoundError: lookup by name or id found nothing in scope
- ConflictError: creation or rename violates the uniqueness key

Usage:
    from warden.core.errors import NotFoundError
    from warden.core.enums import ErrorCode
    from warden.core.result import Failure

    return Failure(NotFoundError(
        code=ErrorCode.ROLE_NOT_FOUND,
        message="There is no role named `editor` for guard `web`.",
        resource_type="Role",
        resource_id="editor",
    ))
"""

from dataclasses import dataclass

from warden.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Name of the argument that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Record not found in the current scope.

    Attributes:
        resource_type: "Role" or "Permission".
        resource_id: Name or id that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Record already exists under the uniqueness key.

    Attributes:
        resource_type: "Role" or "Permission".
        conflicting_field: Field that clashed (usually "name").
    """

    resource_type: str
    conflicting_field: str | None = None
