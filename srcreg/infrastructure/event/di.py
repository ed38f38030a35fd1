"""Dependency injection provider for the fact log."""

from dishka import provide

from srcreg.domain.shared.event_log import EventLog
from srcreg.domain.shared.outbox import Outbox
from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope


class EventProvider(Provider):
    """Outbox (write side) and EventLog (read side), fresh per unit of work."""

    @provide(scope=Scope.UOW)
    def get_outbox(self, repo: EventRepository) -> Outbox:
        return Outbox(repo)

    @provide(scope=Scope.UOW)
    def get_event_log(self, repo: EventRepository) -> EventLog:
        return EventLog(repo)
