"""EventRepository port - pure CRUD for fact persistence."""

from abc import abstractmethod
from typing import Protocol, TypeVar

from srcreg.domain.shared.event import Event, EventId
from srcreg.domain.shared.port import Port

E = TypeVar("E", bound=Event)


class EventRepository(Port, Protocol):
    """Repository for domain events - pure data access.

    Delivery semantics (pending/delivered/failed) are handled by the Outbox service.
    """

    @abstractmethod
    async def save(self, event: Event, status: str = "pending") -> None:
        """Persist an event with initial status."""
        ...

    @abstractmethod
    async def get(self, event_id: EventId) -> Event | None:
        """Get an event by ID."""
        ...

    @abstractmethod
    async def update_status(
        self,
        event_id: EventId,
        status: str,
        error: str | None = None,
    ) -> None:
        """Update an event's delivery status."""
        ...

    @abstractmethod
    async def find_pending(self, limit: int = 100) -> list[Event]:
        """Find events with pending status, oldest first."""
        ...

    @abstractmethod
    async def find_latest_by_type(self, event_type: type[E]) -> E | None:
        """Find the most recent event of a given type."""
        ...

    @abstractmethod
    async def list_events(self, event_types: list[str] | None = None) -> list[Event]:
        """List events in append order, optionally filtered by type names."""
        ...

    @abstractmethod
    async def count(self, event_types: list[str] | None = None) -> int:
        """Count events, optionally filtered by types."""
        ...
