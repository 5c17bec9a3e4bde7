"""Domain errors package.

Usage:
    from warden.domain.errors import GuardMismatchError
"""

from warden.domain.errors.guard_error import GuardMismatchError

__all__ = ["GuardMismatchError"]
