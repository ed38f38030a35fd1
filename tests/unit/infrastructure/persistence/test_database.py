"""Tests for engine construction and the session gate."""

import asyncio

import pytest
from sqlalchemy.pool import NullPool, StaticPool

from srcreg.config import DatabaseConfig
from srcreg.infrastructure.persistence.database import (
    SessionGate,
    create_db_engine,
    shares_one_connection,
)


class TestEngine:
    @pytest.mark.parametrize(
        "url, shared",
        [
            ("sqlite+aiosqlite://", True),
            ("sqlite+aiosqlite:///:memory:", True),
            ("sqlite+aiosqlite:///tmp/registry.db", False),
            ("postgresql+asyncpg://srcreg@localhost/srcreg", False),
        ],
    )
    def test_shares_one_connection(self, url: str, shared: bool):
        assert shares_one_connection(url) is shared

    def test_in_memory_sqlite_uses_a_static_pool(self):
        engine = create_db_engine(DatabaseConfig(url="sqlite+aiosqlite://"))

        assert isinstance(engine.sync_engine.pool, StaticPool)

    def test_file_sqlite_opens_a_connection_per_session(self, tmp_path):
        engine = create_db_engine(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'r.db'}"))

        assert isinstance(engine.sync_engine.pool, NullPool)


class TestSessionGate:
    async def _peak_holders(self, gate: SessionGate, holders: int = 5) -> int:
        inside = 0
        peak = 0

        async def hold() -> None:
            nonlocal inside, peak
            async with gate.hold():
                inside += 1
                peak = max(peak, inside)
                await asyncio.sleep(0)
                inside -= 1

        await asyncio.gather(*(hold() for _ in range(holders)))
        return peak

    @pytest.mark.asyncio
    async def test_exclusive_gate_admits_one_holder_at_a_time(self):
        gate = SessionGate(exclusive=True)

        assert gate.exclusive
        assert await self._peak_holders(gate) == 1

    @pytest.mark.asyncio
    async def test_open_gate_admits_everyone(self):
        gate = SessionGate(exclusive=False)

        assert not gate.exclusive
        assert await self._peak_holders(gate) == 5
