"""Dependency container (composition root).

Application-scoped singletons are lru_cached factories; stores and resolvers
are built per unit of work around a set of repositories.

Application-scoped:
- get_permission_config(): PermissionConfig built from Settings
- get_logger(): structlog ConsoleAdapter
- get_event_bus(): InMemoryEventBus with the cache invalidator subscribed
- get_permission_cache(): RedisPermissionCache (None without REDIS_URL)
- get_database(): Database (requires DATABASE_URL)
- get_team_scope() / get_guard_resolver()

Per unit of work:
- build_services(...): wire stores and resolver around repositories
- sql_services(session) / memory_services(registry): adapter shortcuts

Usage:
    async with get_database().get_session() as session:
        warden = sql_services(session)
        await warden.graph.assign_role(user, "editor")
        allowed = await warden.resolver.has_permission_to(user, "posts.edit")
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from warden.application.services import (
    AssignmentGraph,
    GuardResolver,
    PermissionResolver,
    PermissionStore,
    RoleStore,
    TeamScopeResolver,
)
from warden.core.config import get_settings
from warden.domain.protocols import (
    AssignmentRepository,
    EventBusProtocol,
    LoggerProtocol,
    PermissionRepository,
    RoleRepository,
)
from warden.domain.value_objects import PermissionConfig

if TYPE_CHECKING:
    from warden.infrastructure.cache import RedisPermissionCache
    from warden.infrastructure.memory import InMemoryRegistry
    from warden.infrastructure.persistence import Database


@dataclass(frozen=True, slots=True)
class WardenServices:
    """Stores and resolver sharing one set of repositories."""

    roles: RoleStore
    permissions: PermissionStore
    graph: AssignmentGraph
    resolver: PermissionResolver
    teams: TeamScopeResolver


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_permission_config() -> PermissionConfig:
    """Translate Settings into the explicit config injected into services."""
    settings = get_settings()
    return PermissionConfig(
        default_guard=settings.default_guard,
        guard_providers=settings.guard_providers,
        teams_enabled=settings.teams_enabled,
        teams_key=settings.teams_key,
        wildcard_enabled=settings.enable_wildcard_permission,
        wildcard_delimiters=settings.wildcard_delimiters,
    )


@lru_cache()
def get_logger() -> LoggerProtocol:
    """Return the application-scoped logger singleton.

    JSON output outside development unless LOG_JSON overrides it.
    """
    from warden.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(use_json=settings.use_json_logs, level=settings.log_level)


@lru_cache()
def get_permission_cache() -> "RedisPermissionCache | None":
    """Redis permission cache, or None when REDIS_URL is not configured."""
    settings = get_settings()
    if not settings.redis_url:
        return None

    from redis.asyncio import Redis

    from warden.infrastructure.cache import RedisPermissionCache

    client = Redis.from_url(
        settings.redis_url,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    return RedisPermissionCache(
        redis_client=client,
        key_prefix=settings.permission_cache_key,
        logger=get_logger(),
    )


@lru_cache()
def get_event_bus() -> EventBusProtocol:
    """Event bus singleton with the cache invalidator subscribed.

    Returns:
        InMemoryEventBus. Without a permission cache no handlers are
        subscribed and publishing is a no-op.
    """
    from warden.application.event_handlers import PermissionCacheInvalidationHandler
    from warden.infrastructure.events import InMemoryEventBus

    logger = get_logger()
    event_bus = InMemoryEventBus(logger=logger)

    cache = get_permission_cache()
    if cache is not None:
        PermissionCacheInvalidationHandler(cache=cache, logger=logger).subscribe_all(
            event_bus
        )
    return event_bus


@lru_cache()
def get_database() -> "Database":
    """Database manager singleton.

    Raises:
        RuntimeError: If DATABASE_URL is not configured.
    """
    from warden.infrastructure.persistence import Database

    settings = get_settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not configured")
    return Database(database_url=settings.database_url, echo=settings.db_echo)


@lru_cache()
def get_team_scope() -> TeamScopeResolver:
    """Team scope resolver singleton (the team id itself is per task)."""
    return TeamScopeResolver(get_permission_config())


@lru_cache()
def get_guard_resolver() -> GuardResolver:
    """Guard resolver singleton."""
    return GuardResolver(get_permission_config())


# ============================================================================
# Per-Unit-of-Work Factories
# ============================================================================


def build_services(
    role_repo: RoleRepository,
    permission_repo: PermissionRepository,
    assignment_repo: AssignmentRepository,
    *,
    config: PermissionConfig | None = None,
    event_bus: EventBusProtocol | None = None,
    logger: LoggerProtocol | None = None,
) -> WardenServices:
    """Wire stores and the resolver around a set of repositories.

    Args:
        role_repo: Role repository adapter.
        permission_repo: Permission repository adapter.
        assignment_repo: Assignment repository adapter.
        config: Overrides the Settings-derived config (tests).
        event_bus: Overrides the singleton event bus.
        logger: Overrides the singleton logger.
    """
    config = config or get_permission_config()
    event_bus = event_bus or get_event_bus()
    logger = logger or get_logger()
    teams = TeamScopeResolver(config)
    guards = GuardResolver(config)

    permissions = PermissionStore(permission_repo, config, event_bus, logger)
    graph = AssignmentGraph(
        role_repo, permission_repo, assignment_repo, guards, teams, event_bus, logger
    )
    return WardenServices(
        roles=RoleStore(role_repo, teams, config, event_bus, logger),
        permissions=permissions,
        graph=graph,
        resolver=PermissionResolver(permissions, graph, guards, config, logger),
        teams=teams,
    )


def sql_services(session: AsyncSession, **overrides: object) -> WardenServices:
    """Services backed by the SQLAlchemy repositories on session."""
    from warden.infrastructure.persistence.repositories import (
        SQLAlchemyAssignmentRepository,
        SQLAlchemyPermissionRepository,
        SQLAlchemyRoleRepository,
    )

    return build_services(
        SQLAlchemyRoleRepository(session),
        SQLAlchemyPermissionRepository(session),
        SQLAlchemyAssignmentRepository(session),
        **overrides,  # type: ignore[arg-type]
    )


def memory_services(registry: "InMemoryRegistry", **overrides: object) -> WardenServices:
    """Services backed by the in-memory repositories over registry."""
    from warden.infrastructure.memory import (
        InMemoryAssignmentRepository,
        InMemoryPermissionRepository,
        InMemoryRoleRepository,
    )

    return build_services(
        InMemoryRoleRepository(registry),
        InMemoryPermissionRepository(registry),
        InMemoryAssignmentRepository(registry),
        **overrides,  # type: ignore[arg-type]
    )
