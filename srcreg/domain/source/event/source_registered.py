"""SourceRegistered event - emitted once per successful registration."""

from srcreg.domain.shared.event import Event
from srcreg.domain.source.model.value import SourceId


class SourceRegistered(Event):
    """A new source was committed to the registry.

    Carries the assigned id and the exact strings that were registered.
    """

    source_id: SourceId
    url: str
    publisher: str
