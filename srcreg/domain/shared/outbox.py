"""Outbox - domain service for outbound fact delivery."""

from typing import TypeVar

from srcreg.domain.shared.event import Event, EventId
from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.domain.shared.service import Service

E = TypeVar("E", bound=Event)


class Outbox(Service):
    """Append-only log of facts awaiting delivery to external observers.

    Business code appends facts after its own state change has committed.
    Whatever relays facts to observers pulls them with fetch_pending() and
    reports back with mark_delivered()/mark_failed().
    """

    _repo: EventRepository

    async def append(self, event: Event) -> None:
        """Add a fact to the outbox for delivery."""
        await self._repo.save(event, status="pending")

    async def fetch_pending(self, limit: int = 100) -> list[Event]:
        """Fetch facts awaiting delivery."""
        return await self._repo.find_pending(limit)

    async def mark_delivered(self, event_id: EventId) -> None:
        await self._repo.update_status(event_id, status="delivered")

    async def mark_failed(self, event_id: EventId, error: str) -> None:
        await self._repo.update_status(event_id, status="failed", error=error)

    async def find_latest(self, event_type: type[E]) -> E | None:
        """Find the most recent fact of a given type."""
        return await self._repo.find_latest_by_type(event_type)
