"""Database engine, session factory and schema creation."""

import asyncio
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from sqlalchemy import insert, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from srcreg.config import DatabaseConfig
from srcreg.domain.source.model.value import FIRST_SOURCE_ID
from srcreg.infrastructure.persistence.tables import (
    STATE_ROW_ID,
    metadata,
    registry_state_table,
)


def _expand_sqlite_path(url: str) -> str:
    """Expand ~ in SQLite URLs and ensure parent directory exists."""
    if not url.startswith("sqlite") or ":memory:" in url or "///" not in url:
        return url

    # Extract path from URL (sqlite+aiosqlite:///path or sqlite:///path)
    prefix_end = url.index("///") + 3
    prefix = url[:prefix_end]
    path = url[prefix_end:]
    if not path:
        return url

    abs_path = os.path.abspath(os.path.expanduser(path))
    Path(abs_path).parent.mkdir(parents=True, exist_ok=True)

    return f"{prefix}{abs_path}"


def shares_one_connection(url: str) -> bool:
    """True for in-memory SQLite, where every session must reuse one connection."""
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


class SessionGate:
    """Admits one unit of work at a time to an engine whose sessions share a connection.

    Closing a session rolls back its connection. On a shared connection that
    would discard another session's uncommitted writes, so such engines get an
    exclusive gate. Other engines pass straight through.
    """

    def __init__(self, exclusive: bool) -> None:
        self._lock = asyncio.Lock() if exclusive else None

    @property
    def exclusive(self) -> bool:
        return self._lock is not None

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        if self._lock is None:
            yield
            return
        async with self._lock:
            yield


def create_db_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create async database engine.

    Handles SQLite and PostgreSQL with appropriate settings.
    """
    url = _expand_sqlite_path(config.url)

    if shares_one_connection(url):
        engine_kwargs: dict[str, Any] = {
            "echo": config.echo,
            # One shared connection, so in-memory databases survive across sessions
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    elif url.startswith("sqlite"):
        engine_kwargs = {
            "echo": config.echo,
            # A fresh connection per session; SQLite's file locks order the writers
            "poolclass": NullPool,
        }
    else:
        engine_kwargs = {
            "echo": config.echo,
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 10,
        }

    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory for dependency injection."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables and the registry state row if they do not exist yet.

    Tables are never altered afterwards.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        result = await conn.execute(
            select(registry_state_table.c.id).where(registry_state_table.c.id == STATE_ROW_ID)
        )
        if result.first() is None:
            await conn.execute(
                insert(registry_state_table).values(
                    id=STATE_ROW_ID, next_source_id=FIRST_SOURCE_ID, writer=None
                )
            )
