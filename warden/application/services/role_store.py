"""Role store: uniqueness, lookup and lifecycle of roles.

A role's uniqueness key is (name, guard_name, team_id). With teams enabled
every lookup applies the NULL-or-match predicate, so a global role is visible
to every team and a team role only to its own team.

Usage:
    result = await roles.create("editor")
    match result:
        case Success(value=role):
            ...
        case Failure(error=ConflictError()):
            ...
"""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from warden.application.services.identity_store import IdentityStore
from warden.application.services.team_scope import TeamScopeResolver
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Role
from warden.domain.events import RoleCreated, RoleDeleted, RoleUpdated
from warden.domain.protocols.event_bus_protocol import EventBusProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.role_repository import RoleRepository
from warden.domain.value_objects import UNSET, PermissionConfig, Unset


class RoleStore(IdentityStore[Role]):
    """Application service owning Role records.

    Dependencies (injected via constructor):
        - RoleRepository: persistence port
        - TeamScopeResolver: current team context and scoping predicate
        - EventBusProtocol: RoleCreated / RoleUpdated / RoleDeleted
        - LoggerProtocol: structured logging

    Example:
        >>> store = RoleStore(repo, teams, config, event_bus, logger)
        >>> result = await store.find_or_create("editor", "web")
    """

    resource_type = "Role"
    not_found_code = ErrorCode.ROLE_NOT_FOUND
    conflict_code = ErrorCode.ROLE_ALREADY_EXISTS

    def __init__(
        self,
        repo: RoleRepository,
        teams: TeamScopeResolver,
        config: PermissionConfig,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize role store with dependencies.

        Args:
            repo: Role repository.
            teams: Team scope resolver.
            config: Permission configuration.
            event_bus: Event bus for registry events.
            logger: Logger.
        """
        super().__init__(config, event_bus, logger)
        self._repo = repo
        self._teams = teams

    def _team_for_create(self, team_id: UUID | None | Unset) -> UUID | None:
        if not self._teams.enabled:
            return None
        if team_id is UNSET:
            return self._teams.default_team_id()
        return team_id

    async def create(
        self,
        name: str,
        guard_name: str | None = None,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[Role, DomainError]:
        """Create a role.

        Args:
            name: Role name (non-empty).
            guard_name: Guard; defaults to the configured default guard.
            team_id: Owning team. When omitted and teams are enabled, the
                current team context is used. Ignored when teams are disabled.

        Returns:
            Success(Role) on creation.
            Failure(ValidationError) for an empty name.
            Failure(ConflictError) if a visible role with that name and
                guard already exists, including a lost creation race.
        """
        validated = self._validate_name(name)
        if isinstance(validated, Failure):
            return validated
        name = validated.value
        guard = self._guard(guard_name)
        owner = self._team_for_create(team_id)

        existing = await self._repo.find(
            guard_name=guard, scope=self._teams.scope(owner), name=name
        )
        if existing is not None:
            return Failure(error=self._conflict(name, guard))

        stored = await self._repo.insert_if_absent(
            Role.new(name=name, guard_name=guard, team_id=owner)
        )
        if stored is None:
            self._logger.info("role_create_conflict", name=name, guard_name=guard)
            return Failure(error=self._conflict(name, guard))

        self._logger.info(
            "role_created",
            role_id=str(stored.id),
            name=stored.name,
            guard_name=stored.guard_name,
            team_id=str(stored.team_id) if stored.team_id else None,
        )
        await self._publish(
            RoleCreated(
                role_id=stored.id,
                name=stored.name,
                guard_name=stored.guard_name,
                team_id=stored.team_id,
            )
        )
        return Success(value=stored)

    async def find_by_name(
        self,
        name: str,
        guard_name: str | None = None,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[Role, DomainError]:
        """Scoped lookup by name.

        Returns:
            Success(Role) if visible, Failure(NotFoundError) otherwise.
            Failure(ValidationError) for an empty name.
        """
        required = self._require_name(name)
        if isinstance(required, Failure):
            return required
        guard = self._guard(guard_name)
        role = await self._repo.find(
            guard_name=guard, scope=self._teams.scope(team_id), name=required.value
        )
        if role is None:
            return Failure(error=self._not_found(name, guard))
        return Success(value=role)

    async def find_by_id(
        self,
        role_id: UUID,
        guard_name: str | None = None,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[Role, DomainError]:
        """Scoped lookup by id.

        Returns:
            Success(Role) if visible, Failure(NotFoundError) otherwise.
        """
        guard = self._guard(guard_name)
        role = await self._repo.find(
            guard_name=guard, scope=self._teams.scope(team_id), role_id=role_id
        )
        if role is None:
            return Failure(error=self._not_found(role_id, guard))
        return Success(value=role)

    async def find_or_create(
        self,
        name: str,
        guard_name: str | None = None,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[Role, DomainError]:
        """Return the visible role named name, creating it if absent.

        Safe under concurrency: racing callers all receive the same record.
        """
        validated = self._validate_name(name)
        if isinstance(validated, Failure):
            return validated
        name = validated.value
        guard = self._guard(guard_name)
        owner = self._team_for_create(team_id)
        scope = self._teams.scope(owner)

        async def lookup() -> Role | None:
            return await self._repo.find(guard_name=guard, scope=scope, name=name)

        return await self._find_or_create(
            name,
            guard,
            lookup,
            lambda: self.create(name, guard, team_id=owner),
        )

    async def rename(
        self,
        role_id: UUID,
        new_name: str,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[Role, DomainError]:
        """Rename a visible role.

        Returns:
            Success(Role) with the new name.
            Failure(NotFoundError) if the role is not visible.
            Failure(ValidationError) for an empty name.
            Failure(ConflictError) if the new name is taken.
        """
        validated = self._validate_name(new_name)
        if isinstance(validated, Failure):
            return validated
        new_name = validated.value

        found = await self._repo.find_many([role_id], scope=self._teams.scope(team_id))
        if not found:
            return Failure(error=self._not_found(role_id, None))
        role = found[0]
        if role.name == new_name:
            return Success(value=role)

        clash = await self._repo.find(
            guard_name=role.guard_name,
            scope=self._teams.scope(role.team_id),
            name=new_name,
        )
        renamed = replace(role, name=new_name, updated_at=datetime.now(UTC))
        if clash is not None or not await self._repo.rename(renamed):
            return Failure(error=self._conflict(new_name, role.guard_name))

        self._logger.info(
            "role_renamed",
            role_id=str(role.id),
            old_name=role.name,
            new_name=new_name,
        )
        await self._publish(
            RoleUpdated(role_id=role.id, old_name=role.name, new_name=new_name)
        )
        return Success(value=renamed)

    async def delete(
        self,
        role_id: UUID,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[None, DomainError]:
        """Delete a visible role together with all of its edges.

        Returns:
            Success(None) on deletion, Failure(NotFoundError) otherwise.
        """
        found = await self._repo.find_many([role_id], scope=self._teams.scope(team_id))
        if not found or not await self._repo.delete_cascade(role_id):
            return Failure(error=self._not_found(role_id, None))
        role = found[0]

        self._logger.info("role_deleted", role_id=str(role.id), name=role.name)
        await self._publish(RoleDeleted(role_id=role.id, name=role.name))
        return Success(value=None)

    async def all(
        self,
        guard_name: str | None = None,
        *,
        team_id: UUID | None | Unset = UNSET,
    ) -> Result[list[Role], DomainError]:
        """List visible roles ordered by name, optionally for one guard."""
        roles = await self._repo.list_all(
            scope=self._teams.scope(team_id), guard_name=guard_name
        )
        return Success(value=roles)
