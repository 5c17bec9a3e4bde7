"""Shared behavior of the role and permission stores.

Both stores enforce a uniqueness key on named records, validate names the
same way, report the same error shapes and follow the same find-or-create
protocol:

    1. Probe for a visible record; return it if found.
    2. Otherwise create it. The repository insert is atomic, so of two
       racing creators exactly one wins.
    3. The loser gets a ConflictError from create, re-reads, and returns the
       winner's record. No client-side locking.
"""

from collections.abc import Awaitable, Callable
from typing import ClassVar, Generic, TypeVar

from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, DomainError, NotFoundError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Permission, Role
from warden.domain.events import PermissionRegistryChanged
from warden.domain.protocols.event_bus_protocol import EventBusProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.value_objects import PermissionConfig

EntityT = TypeVar("EntityT", Role, Permission)


class IdentityStore(Generic[EntityT]):
    """Base for RoleStore and PermissionStore.

    Subclasses set the class attributes naming their resource and error codes.

    Attributes:
        _config: Injected permission configuration.
        _event_bus: Event bus for registry change events.
        _logger: Logger bound to the store's component name.
    """

    resource_type: ClassVar[str]
    not_found_code: ClassVar[ErrorCode]
    conflict_code: ClassVar[ErrorCode]

    def __init__(
        self,
        config: PermissionConfig,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._config = config
        self._event_bus = event_bus
        self._logger = logger.bind(component=f"{self.resource_type.lower()}_store")

    def _guard(self, guard_name: str | None) -> str:
        return guard_name or self._config.default_guard

    def _validate_name(self, name: str) -> Result[str, ValidationError]:
        """Validate a name about to be written."""
        return self._require_name(name)

    def _require_name(self, name: str) -> Result[str, ValidationError]:
        """Names must be non-empty once surrounding whitespace is removed."""
        stripped = name.strip()
        if not stripped:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_NAME,
                    message=f"{self.resource_type} name must not be empty.",
                    field="name",
                )
            )
        return Success(value=stripped)

    def _not_found(self, key: object, guard_name: str | None) -> NotFoundError:
        where = f" for guard `{guard_name}`" if guard_name else ""
        return NotFoundError(
            code=self.not_found_code,
            message=f"There is no {self.resource_type.lower()} `{key}`{where}.",
            resource_type=self.resource_type,
            resource_id=str(key),
        )

    def _conflict(self, name: str, guard_name: str) -> ConflictError:
        return ConflictError(
            code=self.conflict_code,
            message=(
                f"A {self.resource_type.lower()} `{name}` already exists "
                f"for guard `{guard_name}`."
            ),
            resource_type=self.resource_type,
            conflicting_field="name",
        )

    async def _publish(self, event: PermissionRegistryChanged) -> None:
        await self._event_bus.publish(event)

    async def _find_or_create(
        self,
        name: str,
        guard_name: str,
        lookup: Callable[[], Awaitable[EntityT | None]],
        create: Callable[[], Awaitable[Result[EntityT, DomainError]]],
    ) -> Result[EntityT, DomainError]:
        existing = await lookup()
        if existing is not None:
            return Success(value=existing)

        created = await create()
        match created:
            case Failure(error=ConflictError()):
                winner = await lookup()
                if winner is None:
                    return created
                self._logger.info(
                    "find_or_create_race_lost",
                    name=name,
                    guard_name=guard_name,
                    winner_id=str(winner.id),
                )
                return Success(value=winner)
            case _:
                return created
