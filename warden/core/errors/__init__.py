"""Core errors package.

Usage:
    from warden.core.errors import DomainError, NotFoundError, ConflictError
"""

from warden.core.errors.common_errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from warden.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
