"""Team scope resolution.

The current team id lives in a ContextVar, so each asyncio task (and each
thread) sees its own value and concurrent requests never observe each
other's tenant. Set it once per request, e.g. in middleware, and every
store call made in that context is scoped to the team.

Usage:
    teams = TeamScopeResolver(config)

    with teams.scoped(team_id):
        await roles.find_by_name("editor")  # team_id IS NULL OR team_id = team

    # or explicitly
    token = teams.set_team_id(team_id)
    try:
        ...
    finally:
        teams.reset(token)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from uuid import UUID

from warden.domain.value_objects import UNSET, PermissionConfig, TeamScope, Unset

_current_team_id: ContextVar[UUID | None] = ContextVar(
    "warden_team_id", default=None
)


class TeamScopeResolver:
    """Builds TeamScope predicates from configuration and the team context.

    Attributes:
        _config: Injected permission configuration.
    """

    def __init__(self, config: PermissionConfig) -> None:
        """Initialize resolver with configuration.

        Args:
            config: Permission configuration (teams_enabled, teams_key).
        """
        self._config = config

    @property
    def enabled(self) -> bool:
        """Whether team scoping applies."""
        return self._config.teams_enabled

    @property
    def teams_key(self) -> str:
        """Host-facing name of the tenant discriminator.

        Informational only; the bundled repositories use a fixed `team_id`
        column whatever this is set to.
        """
        return self._config.teams_key

    def current_team_id(self) -> UUID | None:
        """Team id of the current context (None if unset)."""
        return _current_team_id.get()

    def set_team_id(self, team_id: UUID | None) -> Token[UUID | None]:
        """Set the team id for the current context.

        Returns:
            Token to pass to reset() to restore the previous value.
        """
        return _current_team_id.set(team_id)

    def reset(self, token: Token[UUID | None]) -> None:
        """Restore the team id that was active before set_team_id()."""
        _current_team_id.reset(token)

    @contextmanager
    def scoped(self, team_id: UUID | None) -> Iterator[None]:
        """Run a block with team_id as the current team."""
        token = self.set_team_id(team_id)
        try:
            yield
        finally:
            self.reset(token)

    def scope(self, team_id: UUID | None | Unset = UNSET) -> TeamScope:
        """Scoping predicate for a lookup.

        Args:
            team_id: Explicit team overriding the context. Omit to use the
                current team context.

        Returns:
            Disabled scope when teams are off, else NULL-or-match on the team.
        """
        if not self._config.teams_enabled:
            return TeamScope.disabled()
        if team_id is UNSET:
            team_id = self.current_team_id()
        return TeamScope(enabled=True, team_id=team_id)

    def default_team_id(self) -> UUID | None:
        """Team id stamped on new roles and role assignments."""
        if not self._config.teams_enabled:
            return None
        return self.current_team_id()
