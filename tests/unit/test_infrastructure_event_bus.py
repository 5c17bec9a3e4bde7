"""Unit tests for InMemoryEventBus.

Tests cover:
- Handler dispatch and exact-type routing
- Fail-open behavior (handler exceptions are logged, not raised)
- Publishing without subscribers
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from warden.domain.events import PermissionRegistryChanged, RoleCreated, RoleDeleted


def _role_created() -> RoleCreated:
    return RoleCreated(role_id=uuid4(), name="editor", guard_name="web", team_id=None)


@pytest.mark.unit
class TestInMemoryEventBus:
    """Test publish/subscribe."""

    async def test_handlers_receive_event(self, real_event_bus):
        """Test every subscribed handler is awaited with the event."""
        first, second = AsyncMock(), AsyncMock()
        real_event_bus.subscribe(RoleCreated, first)
        real_event_bus.subscribe(RoleCreated, second)
        event = _role_created()

        await real_event_bus.publish(event)

        first.assert_awaited_once_with(event)
        second.assert_awaited_once_with(event)
        assert real_event_bus.handler_count(RoleCreated) == 2

    async def test_exact_type_routing(self, real_event_bus):
        """Test handlers of a base class or other type are not called."""
        base_handler, other_handler = AsyncMock(), AsyncMock()
        real_event_bus.subscribe(PermissionRegistryChanged, base_handler)
        real_event_bus.subscribe(RoleDeleted, other_handler)

        await real_event_bus.publish(_role_created())

        base_handler.assert_not_awaited()
        other_handler.assert_not_awaited()

    async def test_no_handlers_is_noop(self, real_event_bus, mock_logger):
        """Test publishing without subscribers logs nothing."""
        await real_event_bus.publish(_role_created())

        mock_logger.debug.assert_not_called()
        assert real_event_bus.handler_count(RoleCreated) == 0

    async def test_fail_open(self, real_event_bus, mock_logger):
        """Test a failing handler is logged and the others still run."""
        async def failing_handler(event):
            raise RuntimeError("redis down")

        healthy = AsyncMock()
        real_event_bus.subscribe(RoleCreated, failing_handler)
        real_event_bus.subscribe(RoleCreated, healthy)
        event = _role_created()

        await real_event_bus.publish(event)

        healthy.assert_awaited_once_with(event)
        mock_logger.warning.assert_called_once()
        args, kwargs = mock_logger.warning.call_args
        assert args == ("event_handler_failed",)
        assert kwargs["event_type"] == "RoleCreated"
        assert kwargs["handler_name"].endswith("failing_handler")
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["error_message"] == "redis down"
