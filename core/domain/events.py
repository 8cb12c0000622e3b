"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling side effects (audit log, metrics)
from the license lifecycle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events are immutable value objects that represent
    something that happened in the domain.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    @classmethod
    def new(cls, aggregate_id: str, **fields: Any) -> "DomainEvent":
        """
        Build an event stamped with a fresh id and the current time.

        Args:
            aggregate_id: Identifier of the aggregate the event concerns
            **fields: Event-specific fields

        Returns:
            Event instance
        """
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            aggregate_id=aggregate_id,
            event_type=cls.__name__,
            **fields,
        )

    def payload(self) -> Dict[str, Any]:
        """Return event-specific data. Subclasses extend this."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "data": self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """
        pass


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        pass
