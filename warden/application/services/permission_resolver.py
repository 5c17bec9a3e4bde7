"""Permission resolution.

Answers "does this principal have permission X?".

Discrete mode:
    1. Normalize the argument to a PermissionRef. Names and ids are looked
       up under the principal's default guard.
    2. The permission's guard must be one the principal accepts, otherwise
       the check fails with GuardMismatchError.
    3. The answer is whether the permission belongs to any role the
       principal holds in the current team context.

Wildcard mode (config.wildcard_enabled):
    Granted permission names are patterns. The queried name is matched
    against every granted pattern whose guard the principal accepts. Names
    need no store lookup.

Not holding the permission is Success(False), never a Failure.

Usage:
    result = await resolver.has_permission_to(user, "posts.edit")
    match result:
        case Success(value=True):
            ...
"""

from collections.abc import Awaitable, Callable

from warden.application.services.assignment_graph import AssignmentGraph
from warden.application.services.guard_resolver import GuardResolver
from warden.application.services.permission_store import PermissionStore
from warden.core.errors import DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Permission, Role
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.principal_protocol import PrincipalProtocol
from warden.domain.value_objects import (
    ById,
    ByName,
    PermissionConfig,
    PermissionLike,
    Resolved,
    as_permission_ref,
)
from warden.domain.wildcard import matches, validate_candidate

type GrantLoader = Callable[[], Awaitable[frozenset[Permission]]]


class PermissionResolver:
    """Permission checks for principals and roles.

    Dependencies (injected via constructor):
        - PermissionStore: resolves names and ids to Permission records
        - AssignmentGraph: roles held and permissions granted
        - GuardResolver: acceptable guards per subject
        - PermissionConfig: wildcard toggle and delimiters
        - LoggerProtocol: debug log of every check

    Example:
        >>> resolver = PermissionResolver(permissions, graph, guards, config, logger)
        >>> await resolver.has_permission_to(user, "posts.edit")
        Success(value=True)
    """

    def __init__(
        self,
        permissions: PermissionStore,
        graph: AssignmentGraph,
        guards: GuardResolver,
        config: PermissionConfig,
        logger: LoggerProtocol,
    ) -> None:
        self._permissions = permissions
        self._graph = graph
        self._guards = guards
        self._config = config
        self._logger = logger.bind(component="permission_resolver")

    async def has_permission_to(
        self, principal: PrincipalProtocol, permission: PermissionLike
    ) -> Result[bool, DomainError]:
        """Check whether principal holds permission through any of its roles.

        Args:
            principal: Subject of the check.
            permission: Name, id, Permission, or PermissionRef.

        Returns:
            Success(bool) with the answer.
            Failure(NotFoundError) if a name or id does not resolve
                (discrete mode).
            Failure(GuardMismatchError) if the permission's guard is not
                accepted by the principal.
            Failure(ValidationError) for a malformed name (wildcard mode).
        """

        async def granted() -> frozenset[Permission]:
            return await self._graph.granted_permissions(principal)

        result = await self._check(
            guards=self._guards.guard_names(principal),
            permission=permission,
            granted=granted,
        )
        self._logger.debug(
            "permission_check",
            principal_type=principal.principal_type,
            principal_id=principal.principal_id,
            permission=_describe(permission),
            allowed=result.value if isinstance(result, Success) else None,
            error=result.error.code.value if isinstance(result, Failure) else None,
        )
        return result

    async def has_any_permission(
        self, principal: PrincipalProtocol, *permissions: PermissionLike
    ) -> Result[bool, DomainError]:
        """True as soon as one permission is held; first failure propagates."""
        for permission in permissions:
            result = await self.has_permission_to(principal, permission)
            if isinstance(result, Failure) or result.value:
                return result
        return Success(value=False)

    async def has_all_permissions(
        self, principal: PrincipalProtocol, *permissions: PermissionLike
    ) -> Result[bool, DomainError]:
        """False as soon as one permission is missing; first failure propagates."""
        for permission in permissions:
            result = await self.has_permission_to(principal, permission)
            if isinstance(result, Failure) or not result.value:
                return result
        return Success(value=True)

    async def role_has_permission(
        self, role: Role, permission: PermissionLike
    ) -> Result[bool, DomainError]:
        """Same check with a role as subject; it accepts only its own guard."""

        async def granted() -> frozenset[Permission]:
            return await self._graph.permissions_of(role.id)

        return await self._check(
            guards=(role.guard_name,),
            permission=permission,
            granted=granted,
        )

    async def _check(
        self,
        *,
        guards: tuple[str, ...],
        permission: PermissionLike,
        granted: GrantLoader,
    ) -> Result[bool, DomainError]:
        ref = as_permission_ref(permission)

        if self._config.wildcard_enabled and isinstance(ref, ByName):
            return await self._check_wildcard(ref.name, guards, granted)

        match ref:
            case Resolved(permission=resolved):
                target = resolved
            case ById(permission_id=permission_id):
                found = await self._permissions.find_by_id(permission_id, guards[0])
                if isinstance(found, Failure):
                    return found
                target = found.value
            case ByName(name=name):
                found = await self._permissions.find_by_name(name, guards[0])
                if isinstance(found, Failure):
                    return found
                target = found.value

        guard_check = self._guards.ensure_guard(target.guard_name, guards)
        if isinstance(guard_check, Failure):
            return guard_check

        if self._config.wildcard_enabled:
            return await self._check_wildcard(target.name, (target.guard_name,), granted)

        return Success(value=any(held.id == target.id for held in await granted()))

    async def _check_wildcard(
        self,
        candidate: str,
        guards: tuple[str, ...],
        granted: GrantLoader,
    ) -> Result[bool, DomainError]:
        delimiters = self._config.wildcard_delimiters
        validated = validate_candidate(candidate, delimiters)
        if isinstance(validated, Failure):
            return validated

        return Success(
            value=any(
                held.guard_name in guards
                and matches(held.name, candidate, delimiters)
                for held in await granted()
            )
        )


def _describe(permission: PermissionLike) -> str:
    match as_permission_ref(permission):
        case ByName(name=name):
            return name
        case ById(permission_id=permission_id):
            return str(permission_id)
        case Resolved(permission=resolved):
            return resolved.name
