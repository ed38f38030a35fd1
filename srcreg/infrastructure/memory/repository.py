"""In-memory implementations of the registry's storage ports.

Every method finishes its work without awaiting anything, so on a single
event loop a reader can never observe a half-applied insert.
"""

from typing import TypeVar

from srcreg.domain.auth.model.value import PrincipalId
from srcreg.domain.shared.error import ConflictError, DuplicateEntryError
from srcreg.domain.shared.event import Event, EventId
from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.value import FIRST_SOURCE_ID, Fingerprint, SourceId
from srcreg.domain.source.port.repository import SourceRepository

E = TypeVar("E", bound=Event)


class InMemorySourceRepository(SourceRepository):
    """Record store and URL index held in dicts."""

    def __init__(self) -> None:
        self._records: dict[SourceId, SourceRecord] = {}
        self._url_index: dict[Fingerprint, SourceId] = {}
        self._next_id: SourceId = FIRST_SOURCE_ID
        self._writer: PrincipalId | None = None

    async def get(self, source_id: SourceId) -> SourceRecord | None:
        return self._records.get(source_id)

    async def find_id_by_fingerprint(self, fingerprint: Fingerprint) -> SourceId | None:
        return self._url_index.get(fingerprint)

    async def next_id(self) -> SourceId:
        return self._next_id

    async def insert(
        self, source_id: SourceId, record: SourceRecord, fingerprint: Fingerprint
    ) -> None:
        if fingerprint in self._url_index:
            raise DuplicateEntryError(
                f"URL already registered as source {self._url_index[fingerprint]}",
                fingerprint=str(fingerprint),
            )
        if source_id != self._next_id:
            raise ConflictError(f"Expected source id {self._next_id}, got {source_id}")

        self._records[source_id] = record
        self._url_index[fingerprint] = source_id
        self._next_id = SourceId(source_id + 1)

    async def count(self) -> int:
        return len(self._records)

    async def get_writer(self) -> PrincipalId | None:
        return self._writer

    async def set_writer(self, writer: PrincipalId) -> None:
        self._writer = writer


class InMemoryEventRepository(EventRepository):
    """Fact log held in an append-ordered dict."""

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}
        self._status: dict[EventId, str] = {}
        self._errors: dict[EventId, str] = {}

    async def save(self, event: Event, status: str = "pending") -> None:
        self._events[event.id] = event
        self._status[event.id] = status

    async def get(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    async def update_status(
        self,
        event_id: EventId,
        status: str,
        error: str | None = None,
    ) -> None:
        if event_id not in self._events:
            return
        self._status[event_id] = status
        if error is not None:
            self._errors[event_id] = error

    async def find_pending(self, limit: int = 100) -> list[Event]:
        pending = [e for e in self._events.values() if self._status[e.id] == "pending"]
        return pending[:limit]

    async def find_latest_by_type(self, event_type: type[E]) -> E | None:
        for event in reversed(self._events.values()):
            if isinstance(event, event_type):
                return event
        return None

    async def list_events(self, event_types: list[str] | None = None) -> list[Event]:
        return [e for e in self._events.values() if _matches(e, event_types)]

    async def count(self, event_types: list[str] | None = None) -> int:
        return len(await self.list_events(event_types))

    def status_of(self, event_id: EventId) -> str | None:
        return self._status.get(event_id)

    def error_of(self, event_id: EventId) -> str | None:
        return self._errors.get(event_id)


def _matches(event: Event, event_types: list[str] | None) -> bool:
    return not event_types or type(event).__name__ in event_types
