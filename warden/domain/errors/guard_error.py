"""Guard mismatch error.

Returned when a role or permission belongs to a guard the subject does not
accept, so a check never silently succeeds across authentication contexts.

Usage:
    return Failure(GuardMismatchError.create("web", frozenset({"api"})))
"""

from dataclasses import dataclass

from warden.core.enums import ErrorCode
from warden.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class GuardMismatchError(DomainError):
    """Record guard not accepted by the subject.

    Attributes:
        given: Guard of the role or permission being checked.
        expected: Guards the subject accepts.
    """

    given: str
    expected: frozenset[str]

    @classmethod
    def create(cls, given: str, expected: frozenset[str]) -> "GuardMismatchError":
        """Build the error with a readable message."""
        return cls(
            code=ErrorCode.GUARD_MISMATCH,
            message=(
                f"The given role or permission should use guard "
                f"`{', '.join(sorted(expected))}` instead of `{given}`."
            ),
            given=given,
            expected=expected,
        )
