"""Event bus protocol (port) for domain events.

Stores and the assignment graph publish registry events through this port;
handlers such as the permission cache invalidator subscribe to them.

Implementations:
    - InMemoryEventBus: warden/infrastructure/events/in_memory_event_bus.py

Usage:
    >>> event_bus.subscribe(RoleCreated, handle_role_created)
    >>> await event_bus.publish(RoleCreated(role_id=role.id, ...))
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from warden.domain.events.base_event import DomainEvent

# Type alias for event handler functions
EventHandler = Callable[[DomainEvent], Awaitable[None]]
"""Async handler: takes one event, returns None, should be idempotent."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. **Fail-open behavior**: One handler failure must NOT prevent other
           handlers from executing, and is never raised to the publisher.
        2. **Exact type routing**: Handlers receive only events of the exact
           type they subscribed to.
        3. **No ordering guarantees**: Handlers may run concurrently.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register an async handler for one event type.

        Args:
            event_type: Concrete event class (no inheritance matching).
            handler: Async callable invoked with each published event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to every handler registered for its type.

        Args:
            event: Event instance. No handlers registered is a no-op.
        """
        ...
