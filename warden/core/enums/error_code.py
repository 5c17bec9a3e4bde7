"""Machine-readable error codes.

Codes follow the ENTITY_REASON naming convention and travel inside
DomainError instances returned in Failure results.

Categories:
- Validation errors (INVALID_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authorization errors (GUARD_MISMATCH)
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes returned by stores and resolvers."""

    # Validation errors
    INVALID_NAME = "invalid_name"
    INVALID_WILDCARD_PATTERN = "invalid_wildcard_pattern"

    # Resource errors
    ROLE_NOT_FOUND = "role_not_found"
    PERMISSION_NOT_FOUND = "permission_not_found"

    # Conflict errors
    ROLE_ALREADY_EXISTS = "role_already_exists"
    PERMISSION_ALREADY_EXISTS = "permission_already_exists"

    # Authorization errors
    GUARD_MISMATCH = "guard_mismatch"
