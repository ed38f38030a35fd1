"""Fixtures for SQL adapter tests: an in-memory SQLite database per test."""

from typing import AsyncIterator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from srcreg.config import DatabaseConfig
from srcreg.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite://"))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with create_session_factory(engine)() as session:
        yield session
