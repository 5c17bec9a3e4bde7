"""Unit tests for the dependency container.

Tests cover:
- Settings translated into PermissionConfig
- Event bus wiring with and without a permission cache
- get_database() without DATABASE_URL
- build_services / memory_services wiring
"""

import os
from unittest.mock import patch

import pytest

from warden.core import container
from warden.core.config import Settings
from warden.domain.events import REGISTRY_EVENTS
from warden.domain.value_objects import PermissionConfig
from warden.infrastructure.memory import InMemoryRegistry

_SINGLETONS = (
    container.get_permission_config,
    container.get_logger,
    container.get_permission_cache,
    container.get_event_bus,
    container.get_database,
    container.get_team_scope,
    container.get_guard_resolver,
)


@pytest.fixture
def settings_from():
    """Patch the container's settings and reset every cached singleton."""

    def apply(**env: str) -> None:
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        patcher = patch.object(container, "get_settings", return_value=settings)
        patcher.start()
        patchers.append(patcher)

    patchers: list = []
    for factory in _SINGLETONS:
        factory.cache_clear()
    yield apply
    for patcher in patchers:
        patcher.stop()
    for factory in _SINGLETONS:
        factory.cache_clear()


@pytest.mark.unit
class TestApplicationSingletons:
    """Test lru_cached factories."""

    def test_permission_config_from_settings(self, settings_from):
        """Test every Settings field reaches PermissionConfig."""
        settings_from(
            DEFAULT_GUARD="api",
            GUARD_PROVIDERS='{"User": ["web"]}',
            TEAMS_ENABLED="true",
            ENABLE_WILDCARD_PERMISSION="true",
            WILDCARD_DELIMITERS=":",
        )

        config = container.get_permission_config()

        assert config == PermissionConfig(
            default_guard="api",
            guard_providers={"User": ["web"]},
            teams_enabled=True,
            teams_key="team_id",
            wildcard_enabled=True,
            wildcard_delimiters=":",
        )
        assert container.get_permission_config() is config

    def test_event_bus_without_cache(self, settings_from):
        """Test no handlers are subscribed without REDIS_URL."""
        settings_from()

        bus = container.get_event_bus()

        assert container.get_permission_cache() is None
        assert all(bus.handler_count(event) == 0 for event in REGISTRY_EVENTS)

    def test_event_bus_with_cache(self, settings_from):
        """Test the cache invalidator is subscribed to every registry event."""
        settings_from(REDIS_URL="redis://localhost:6379/0")

        bus = container.get_event_bus()

        assert container.get_permission_cache() is not None
        assert all(bus.handler_count(event) == 1 for event in REGISTRY_EVENTS)

    def test_database_requires_url(self, settings_from):
        """Test get_database() fails fast without DATABASE_URL."""
        settings_from()

        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            container.get_database()


@pytest.mark.unit
class TestServiceWiring:
    """Test per-unit-of-work factories."""

    def test_memory_services_share_config(self, mock_event_bus, mock_logger):
        """Test stores and resolvers see the injected config."""
        config = PermissionConfig(teams_enabled=True, default_guard="api")

        services = container.memory_services(
            InMemoryRegistry(), config=config, event_bus=mock_event_bus, logger=mock_logger
        )

        assert services.teams.enabled is True
        assert services.teams.scope().enabled is True

    async def test_services_share_repositories(self, services, user):
        """Test a role created through one store is usable by the graph."""
        role = (await services.roles.create("editor")).value

        await services.graph.assign_role(user, "editor")

        assert await services.graph.roles_of(user) == frozenset({role})
