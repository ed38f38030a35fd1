from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from srcreg.config import Config
from srcreg.domain.shared.port.event_repository import EventRepository
from srcreg.domain.source.port.repository import SourceRepository
from srcreg.infrastructure.persistence.database import (
    SessionGate,
    create_db_engine,
    create_session_factory,
    shares_one_connection,
)
from srcreg.infrastructure.persistence.repository.event import SQLAlchemyEventRepository
from srcreg.infrastructure.persistence.repository.source import SQLAlchemySourceRepository
from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope


class PersistenceProvider(Provider):
    """SQL storage: one engine per application, one session per unit of work."""

    # Factories require method syntax
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_session_gate(self, config: Config) -> SessionGate:
        return SessionGate(exclusive=shares_one_connection(config.database.url))

    @provide(scope=Scope.UOW)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        gate: SessionGate,
    ) -> AsyncIterable[AsyncSession]:
        async with gate.hold():
            async with session_factory() as session:
                yield session

    # Repositories
    source_repo = provide(
        SQLAlchemySourceRepository, scope=Scope.UOW, provides=SourceRepository
    )
    event_repo = provide(SQLAlchemyEventRepository, scope=Scope.UOW, provides=EventRepository)
