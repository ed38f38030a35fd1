"""Domain events (facts) recorded by the registry."""

from datetime import UTC, datetime
from typing import Any, ClassVar, NewType
from uuid import UUID, uuid4

from pydantic import ConfigDict, Field

from srcreg.domain.shared.model.entity import Entity

EventId = NewType("EventId", UUID)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def new_event_id() -> EventId:
    return EventId(uuid4())


class Event(Entity):
    """Base class for domain events.

    Events are immutable once created. Subclasses are automatically
    registered by name in Event._registry.
    """

    model_config = ConfigDict(frozen=True)

    id: EventId = Field(default_factory=new_event_id)
    created_at: datetime = Field(default_factory=_utc_now)

    # Auto-populated registry of all Event subclasses
    _registry: ClassVar[dict[str, type["Event"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry[cls.__name__] = cls

    @classmethod
    def lookup(cls, name: str) -> type["Event"] | None:
        """Resolve a registered event class by its type name."""
        return cls._registry.get(name)
