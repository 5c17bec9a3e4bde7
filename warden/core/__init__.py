"""Core shared kernel.

Result types, base errors and configuration used across all layers.
The core module has NO dependencies on other Warden layers.
"""

from warden.core.enums import ErrorCode
from warden.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from warden.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]
