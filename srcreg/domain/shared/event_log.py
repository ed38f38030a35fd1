"""EventLog - read side of the fact store."""

from srcreg.domain.shared.event import Event, EventId
from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.domain.shared.service import Service


class EventLog(Service):
    """Service for querying recorded facts, e.g. to rebuild an external index."""

    _repo: EventRepository

    async def list_events(self, event_types: list[str] | None = None) -> list[Event]:
        """List facts in the order they were appended.

        Args:
            event_types: Filter by event type names (e.g., ["SourceRegistered"]).
        """
        return await self._repo.list_events(event_types=event_types)

    async def count(self, event_types: list[str] | None = None) -> int:
        return await self._repo.count(event_types=event_types)

    async def get(self, event_id: EventId) -> Event | None:
        return await self._repo.get(event_id)
