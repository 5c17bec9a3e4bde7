"""Guard resolution service.

A guard names the authentication context a role or permission is valid
under ("web", "api"). Every principal has a set of acceptable guards; a
role or permission whose guard is outside that set must never satisfy a
check for the principal.

Resolution order for a principal's acceptable guards:
    1. The guard pinned on the principal itself (principal.guard_name)
    2. The guards configured for its principal_type (guard_providers)
    3. The configured default guard

Usage:
    resolver = GuardResolver(config)
    resolver.guard_names(PrincipalRef(principal_type="User", principal_id="42"))
    # ('web',)
    resolver.ensure_guard("web", frozenset({"api"}))
    # Failure(error=GuardMismatchError(...))
"""

from collections.abc import Iterable

from warden.core.result import Failure, Result, Success
from warden.domain.errors import GuardMismatchError
from warden.domain.protocols.principal_protocol import PrincipalProtocol
from warden.domain.value_objects import PermissionConfig


class GuardResolver:
    """Maps principals to their acceptable guard names.

    Attributes:
        _config: Injected permission configuration.
    """

    def __init__(self, config: PermissionConfig) -> None:
        """Initialize resolver with configuration.

        Args:
            config: Permission configuration (default guard, guard providers).
        """
        self._config = config

    @property
    def default_guard(self) -> str:
        """Configured fallback guard."""
        return self._config.default_guard

    def guard_names(self, principal: PrincipalProtocol) -> tuple[str, ...]:
        """Acceptable guards for principal, most preferred first."""
        if principal.guard_name:
            return (principal.guard_name,)
        configured = self._config.guard_providers.get(principal.principal_type)
        if configured:
            return tuple(configured)
        return (self._config.default_guard,)

    def default_guard_name(self, principal: PrincipalProtocol) -> str:
        """First acceptable guard for principal."""
        return self.guard_names(principal)[0]

    def ensure_guard(
        self, given: str, expected: Iterable[str]
    ) -> Result[None, GuardMismatchError]:
        """Check that given is one of the expected guards.

        Args:
            given: Guard of the role or permission under test.
            expected: Guards acceptable for the subject.

        Returns:
            Success(None) if accepted, Failure(GuardMismatchError) otherwise.
        """
        accepted = frozenset(expected)
        if given in accepted:
            return Success(value=None)
        return Failure(error=GuardMismatchError.create(given, accepted))
