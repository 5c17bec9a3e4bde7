"""Permission domain entity.

Permissions carry no team id: they are shared by every team even when roles
are team-scoped. Uniqueness key is (name, guard_name).
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True)
class Permission:
    """Named permission valid under one guard.

    In wildcard mode the name doubles as a pattern (e.g., "posts.*.own").

    Attributes:
        id: Stable identifier.
        name: Non-empty permission name.
        guard_name: Authentication context the permission is valid under.
        created_at: Creation timestamp (UTC).
        updated_at: Last rename timestamp (UTC).
    """

    id: UUID
    name: str
    guard_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, *, name: str, guard_name: str) -> "Permission":
        """Build a not-yet-persisted permission with a fresh id and timestamps."""
        now = datetime.now(UTC)
        return cls(
            id=uuid7(),  # type: ignore[arg-type]
            name=name,
            guard_name=guard_name,
            created_at=now,
            updated_at=now,
        )
