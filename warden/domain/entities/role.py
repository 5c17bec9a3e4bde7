"""Role domain entity.

Pure data, no framework dependencies. A role is identified by the
uniqueness key (name, guard_name, team_id); team_id is None for global roles
and always None when teams are disabled.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True)
class Role:
    """Named role valid under one guard, optionally owned by a team.

    Attributes:
        id: Stable identifier.
        name: Non-empty role name (e.g., "editor").
        guard_name: Authentication context the role is valid under.
        team_id: Owning team, or None for a role visible to every team.
        created_at: Creation timestamp (UTC).
        updated_at: Last rename timestamp (UTC).

    Example:
        >>> role = Role.new(name="editor", guard_name="web")
        >>> role.is_global
        True
    """

    id: UUID
    name: str
    guard_name: str
    team_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(
        cls,
        *,
        name: str,
        guard_name: str,
        team_id: UUID | None = None,
    ) -> "Role":
        """Build a not-yet-persisted role with a fresh id and timestamps."""
        now = datetime.now(UTC)
        return cls(
            id=uuid7(),  # type: ignore[arg-type]
            name=name,
            guard_name=guard_name,
            team_id=team_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_global(self) -> bool:
        """True when the role is not owned by any team."""
        return self.team_id is None
