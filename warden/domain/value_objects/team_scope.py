"""Team scoping predicate.

When teams are enabled, a team-scoped record is visible if its team_id is
NULL (global) or equals the scope's team_id. Principal-role edges are
stricter: they match the scope's team_id exactly (TeamScope.owns).
Repositories translate a TeamScope into these predicates; a disabled scope
adds no predicate at all.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal
from uuid import UUID


class _Unset(Enum):
    UNSET = "UNSET"


UNSET: Final = _Unset.UNSET
"""Marker for "argument omitted", distinct from an explicit None team id."""

type Unset = Literal[_Unset.UNSET]


@dataclass(frozen=True, slots=True, kw_only=True)
class TeamScope:
    """NULL-or-match team predicate.

    Attributes:
        enabled: Whether team scoping applies at all.
        team_id: Team whose records are visible in addition to global ones.

    Example:
        >>> scope = TeamScope(enabled=True, team_id=team_a)
        >>> scope.admits(None), scope.admits(team_a), scope.admits(team_b)
        (True, True, False)
    """

    enabled: bool
    team_id: UUID | None = None

    @classmethod
    def disabled(cls) -> "TeamScope":
        """Scope that admits every record."""
        return cls(enabled=False)

    def admits(self, record_team_id: UUID | None) -> bool:
        """Check a record's team id against the predicate."""
        if not self.enabled:
            return True
        return record_team_id is None or record_team_id == self.team_id

    def owns(self, edge_team_id: UUID | None) -> bool:
        """Exact-match check for assignment edges.

        An assignment belongs to the team it was made in; a global role
        assigned inside team A is not held in team B or outside any team.
        """
        if not self.enabled:
            return True
        return edge_team_id == self.team_id
