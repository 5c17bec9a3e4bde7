"""Explicit configuration injected into stores and resolvers.

Built once by the container from Settings. Tests build it directly so each
instance can vary teams or wildcard mode independently.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class PermissionConfig:
    """Permission resolution toggles.

    Attributes:
        default_guard: Guard used when no other guard applies.
        guard_providers: Principal type -> acceptable guard names. The first
            guard listed is the type's default guard.
        teams_enabled: Scope roles and role assignments by team.
        teams_key: Name the host application uses for its tenant
            discriminator. Informational only: the bundled adapters always
            store the team in a `team_id` column.
        wildcard_enabled: Treat granted permission names as patterns.
        wildcard_delimiters: Characters separating pattern segments.
    """

    default_guard: str = "web"
    guard_providers: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    teams_enabled: bool = False
    teams_key: str = "team_id"
    wildcard_enabled: bool = False
    wildcard_delimiters: str = "./"

    def __post_init__(self) -> None:
        """Freeze guard providers into an immutable mapping of tuples."""
        frozen = MappingProxyType(
            {kind: tuple(guards) for kind, guards in self.guard_providers.items()}
        )
        object.__setattr__(self, "guard_providers", frozen)
