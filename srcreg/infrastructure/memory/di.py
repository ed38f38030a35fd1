from dishka import provide

from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.domain.source.port.repository import SourceRepository
from srcreg.infrastructure.memory.repository import (
    InMemoryEventRepository,
    InMemorySourceRepository,
)
from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope


class MemoryStorageProvider(Provider):
    """Process-local storage. State lives as long as the container."""

    source_repo = provide(InMemorySourceRepository, scope=Scope.APP, provides=SourceRepository)
    event_repo = provide(InMemoryEventRepository, scope=Scope.APP, provides=EventRepository)
