"""Permission store: uniqueness, lookup and lifecycle of permissions.

Permissions are keyed by (name, guard_name) and are never team-scoped, even
when roles are: a permission created while one team is active is visible
to every other team.

In wildcard mode permission names are patterns ("posts.*"), so names are
also checked for well-formedness on create and rename.
"""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from warden.application.services.identity_store import IdentityStore
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Permission
from warden.domain.events import PermissionCreated, PermissionDeleted, PermissionUpdated
from warden.domain.protocols.event_bus_protocol import EventBusProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.permission_repository import PermissionRepository
from warden.domain.value_objects import PermissionConfig
from warden.domain.wildcard import validate_pattern


class PermissionStore(IdentityStore[Permission]):
    """Application service owning Permission records.

    Example:
        >>> store = PermissionStore(repo, config, event_bus, logger)
        >>> result = await store.create("posts.edit")
    """

    resource_type = "Permission"
    not_found_code = ErrorCode.PERMISSION_NOT_FOUND
    conflict_code = ErrorCode.PERMISSION_ALREADY_EXISTS

    def __init__(
        self,
        repo: PermissionRepository,
        config: PermissionConfig,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize permission store with dependencies.

        Args:
            repo: Permission repository.
            config: Permission configuration.
            event_bus: Event bus for registry events.
            logger: Logger.
        """
        super().__init__(config, event_bus, logger)
        self._repo = repo

    def _validate_name(self, name: str) -> Result[str, ValidationError]:
        validated = super()._validate_name(name)
        if isinstance(validated, Success) and self._config.wildcard_enabled:
            return validate_pattern(validated.value, self._config.wildcard_delimiters)
        return validated

    async def create(
        self, name: str, guard_name: str | None = None
    ) -> Result[Permission, DomainError]:
        """Create a permission.

        Args:
            name: Permission name (non-empty; a well-formed pattern in
                wildcard mode).
            guard_name: Guard; defaults to the configured default guard.

        Returns:
            Success(Permission) on creation.
            Failure(ValidationError) for an invalid name.
            Failure(ConflictError) if (name, guard_name) is taken.
        """
        validated = self._validate_name(name)
        if isinstance(validated, Failure):
            return validated
        name = validated.value
        guard = self._guard(guard_name)

        if await self._repo.find(guard_name=guard, name=name) is not None:
            return Failure(error=self._conflict(name, guard))

        stored = await self._repo.insert_if_absent(
            Permission.new(name=name, guard_name=guard)
        )
        if stored is None:
            self._logger.info("permission_create_conflict", name=name, guard_name=guard)
            return Failure(error=self._conflict(name, guard))

        self._logger.info(
            "permission_created",
            permission_id=str(stored.id),
            name=stored.name,
            guard_name=stored.guard_name,
        )
        await self._publish(
            PermissionCreated(
                permission_id=stored.id,
                name=stored.name,
                guard_name=stored.guard_name,
            )
        )
        return Success(value=stored)

    async def find_by_name(
        self, name: str, guard_name: str | None = None
    ) -> Result[Permission, DomainError]:
        """Lookup by name under a guard; empty names are a ValidationError."""
        required = self._require_name(name)
        if isinstance(required, Failure):
            return required
        guard = self._guard(guard_name)
        permission = await self._repo.find(guard_name=guard, name=required.value)
        if permission is None:
            return Failure(error=self._not_found(name, guard))
        return Success(value=permission)

    async def find_by_id(
        self, permission_id: UUID, guard_name: str | None = None
    ) -> Result[Permission, DomainError]:
        """Lookup by id under a guard."""
        guard = self._guard(guard_name)
        permission = await self._repo.find(guard_name=guard, permission_id=permission_id)
        if permission is None:
            return Failure(error=self._not_found(permission_id, guard))
        return Success(value=permission)

    async def find_or_create(
        self, name: str, guard_name: str | None = None
    ) -> Result[Permission, DomainError]:
        """Return the permission named name, creating it if absent."""
        validated = self._validate_name(name)
        if isinstance(validated, Failure):
            return validated
        name = validated.value
        guard = self._guard(guard_name)

        async def lookup() -> Permission | None:
            return await self._repo.find(guard_name=guard, name=name)

        return await self._find_or_create(
            name, guard, lookup, lambda: self.create(name, guard)
        )

    async def rename(
        self, permission_id: UUID, new_name: str
    ) -> Result[Permission, DomainError]:
        """Rename a permission, keeping (name, guard_name) unique."""
        validated = self._validate_name(new_name)
        if isinstance(validated, Failure):
            return validated
        new_name = validated.value

        found = await self._repo.find_many([permission_id])
        if not found:
            return Failure(error=self._not_found(permission_id, None))
        permission = found[0]
        if permission.name == new_name:
            return Success(value=permission)

        renamed = replace(permission, name=new_name, updated_at=datetime.now(UTC))
        if not await self._repo.rename(renamed):
            return Failure(error=self._conflict(new_name, permission.guard_name))

        self._logger.info(
            "permission_renamed",
            permission_id=str(permission.id),
            old_name=permission.name,
            new_name=new_name,
        )
        await self._publish(
            PermissionUpdated(
                permission_id=permission.id,
                old_name=permission.name,
                new_name=new_name,
            )
        )
        return Success(value=renamed)

    async def delete(self, permission_id: UUID) -> Result[None, DomainError]:
        """Delete a permission and detach it from every role."""
        found = await self._repo.find_many([permission_id])
        if not found or not await self._repo.delete_cascade(permission_id):
            return Failure(error=self._not_found(permission_id, None))
        permission = found[0]

        self._logger.info(
            "permission_deleted",
            permission_id=str(permission.id),
            name=permission.name,
        )
        await self._publish(
            PermissionDeleted(permission_id=permission.id, name=permission.name)
        )
        return Success(value=None)

    async def all(
        self, guard_name: str | None = None
    ) -> Result[list[Permission], DomainError]:
        """List permissions ordered by name, optionally for one guard."""
        return Success(value=await self._repo.list_all(guard_name=guard_name))
