"""Pytest configuration for async testing.

This configuration ensures:
1. Async tests are marked automatically
2. Every test gets a fresh in-memory registry
3. Services are wired with explicit PermissionConfig (no Settings lookup)
4. Integration tests skip cleanly when DATABASE_URL is not set
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from warden.core.container import WardenServices, memory_services
from warden.domain.value_objects import PermissionConfig, PrincipalRef
from warden.infrastructure.events import InMemoryEventBus
from warden.infrastructure.memory import InMemoryRegistry

pytest_plugins = ("pytest_asyncio",)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with in-memory dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    import inspect

    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Reusable Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Mock logger whose bind() returns the same mock.

    Lets tests assert on calls made through a bound logger.
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def mock_event_bus():
    """AsyncMock event bus recording published events."""
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=None)
    event_bus.subscribe = MagicMock()
    return event_bus


@pytest.fixture
def published(mock_event_bus):
    """Callable returning events passed to mock_event_bus, in publish order."""

    def events() -> list:
        return [call.args[0] for call in mock_event_bus.publish.await_args_list]

    return events


# =============================================================================
# In-memory services
# =============================================================================


@pytest.fixture
def config():
    """Default configuration: guard "web", no teams, discrete mode."""
    return PermissionConfig()


@pytest.fixture
def registry():
    """Fresh in-memory registry per test."""
    return InMemoryRegistry()


@pytest.fixture
def services(registry, config, mock_event_bus, mock_logger) -> WardenServices:
    """Stores and resolver over the in-memory registry."""
    return memory_services(
        registry, config=config, event_bus=mock_event_bus, logger=mock_logger
    )


@pytest.fixture
def make_services(registry, mock_event_bus, mock_logger):
    """Factory for services with a custom PermissionConfig."""

    def factory(**config_overrides) -> WardenServices:
        return memory_services(
            registry,
            config=PermissionConfig(**config_overrides),
            event_bus=mock_event_bus,
            logger=mock_logger,
        )

    return factory


@pytest.fixture
def user():
    """User 42 without a pinned guard."""
    return PrincipalRef(principal_type="User", principal_id="42")


@pytest.fixture
def real_event_bus(mock_logger):
    """Real InMemoryEventBus with a mocked logger."""
    return InMemoryEventBus(logger=mock_logger)


# =============================================================================
# Database (integration)
# =============================================================================


@pytest_asyncio.fixture
async def test_database():
    """Database with freshly created tables; skips without DATABASE_URL.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session:
                ...
    """
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    from warden.infrastructure.persistence import Database

    db = Database(database_url=database_url)
    await db.drop_all()
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()
