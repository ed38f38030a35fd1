"""Tests for container wiring and registry startup."""

import asyncio
from pathlib import Path

import pytest

from srcreg.application.di import create_container
from srcreg.application.startup import initialize_registry
from srcreg.config import Config, DatabaseConfig, RegistryConfig
from srcreg.domain.auth.model.identity import Identity, Principal
from srcreg.domain.shared.error import ConfigurationError, UnauthorizedError
from srcreg.domain.shared.event_log import EventLog
from srcreg.domain.source.command.register import (
    RegisterSource,
    RegisterSourceHandler,
    SourceRegisteredResult,
)
from srcreg.domain.source.query.get_source import (
    GetSourceById,
    GetSourceByIdHandler,
    GetSourceByUrl,
    GetSourceByUrlHandler,
    SourceDetail,
)
from srcreg.domain.source.service.registry import SourceRegistry


def _memory_config(writer: str = "owner") -> Config:
    return Config(registry=RegistryConfig(writer=writer, storage="memory"))


def _database_config(path: Path, writer: str = "owner") -> Config:
    return Config(
        registry=RegistryConfig(writer=writer, storage="database"),
        database=DatabaseConfig(url=f"sqlite+aiosqlite:///{path}"),
    )


class TestMemoryContainer:
    @pytest.mark.asyncio
    async def test_state_is_shared_across_units_of_work(self):
        container = create_container(_memory_config())
        try:
            await initialize_registry(container)

            async with container() as uow:
                registry = await uow.get(SourceRegistry)
                assert await registry.register(Principal.of("owner"), "https://a.com/1", "A") == 1

            async with container() as uow:
                handler = await uow.get(GetSourceByUrlHandler)
                detail = await handler.run(GetSourceByUrl(url="https://a.com/1"))
                log = await uow.get(EventLog)

                assert detail == SourceDetail(url="https://a.com/1", publisher="A")
                assert await log.count(event_types=["SourceRegistered"]) == 1
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_units_of_work_share_the_write_lock(self):
        container = create_container(_memory_config())
        try:
            async with container() as first, container() as second:
                a = await first.get(SourceRegistry)
                b = await second.get(SourceRegistry)

                assert a is not b
                assert a.write_lock is b.write_lock
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_register_handler_acts_as_the_caller_in_context(self):
        container = create_container(_memory_config())
        try:
            async with container(context={Identity: Principal.of("owner")}) as uow:
                handler = await uow.get(RegisterSourceHandler)
                result = await handler.run(RegisterSource(url="https://a.com/1", publisher="A"))

                assert result == SourceRegisteredResult(source_id=1)

            async with container(context={Identity: Principal.of("mallory")}) as uow:
                handler = await uow.get(RegisterSourceHandler)

                with pytest.raises(UnauthorizedError):
                    await handler.run(RegisterSource(url="https://a.com/2", publisher="B"))
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_writer_comes_from_config(self):
        container = create_container(_memory_config(writer="alice"))
        try:
            async with container() as uow:
                registry = await uow.get(SourceRegistry)

                with pytest.raises(UnauthorizedError):
                    await registry.register(Principal.of("owner"), "https://a.com", "A")
                assert await registry.register(Principal.of("alice"), "https://a.com", "A") == 1
        finally:
            await container.close()


class TestDatabaseContainer:
    @pytest.mark.asyncio
    async def test_registers_and_reads_back(self, tmp_path: Path):
        container = create_container(_database_config(tmp_path / "registry.db"))
        try:
            await initialize_registry(container)

            async with container() as uow:
                registry = await uow.get(SourceRegistry)
                await registry.register(Principal.of("owner"), "https://a.com/1", "Alpha")

            async with container() as uow:
                handler = await uow.get(GetSourceByIdHandler)
                detail = await handler.run(GetSourceById(source_id=1))

                assert detail == SourceDetail(url="https://a.com/1", publisher="Alpha")
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_storage_is_pinned_to_first_writer(self, tmp_path: Path):
        path = tmp_path / "registry.db"

        container = create_container(_database_config(path, writer="owner"))
        try:
            await initialize_registry(container)
        finally:
            await container.close()

        container = create_container(_database_config(path, writer="mallory"))
        try:
            with pytest.raises(ConfigurationError):
                await initialize_registry(container)
        finally:
            await container.close()


class TestConcurrentUnitsOfWork:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("in_memory", [False, True], ids=["file", "memory"])
    async def test_readers_alongside_the_writer_never_lose_registrations(
        self, tmp_path: Path, in_memory: bool
    ):
        url = "sqlite+aiosqlite://" if in_memory else f"sqlite+aiosqlite:///{tmp_path / 'r.db'}"
        container = create_container(
            Config(
                registry=RegistryConfig(writer="owner", storage="database"),
                database=DatabaseConfig(url=url),
            )
        )
        total = 40
        done = asyncio.Event()
        reads = 0

        async def write() -> None:
            try:
                for n in range(1, total + 1):
                    async with container(context={Identity: Principal.of("owner")}) as uow:
                        handler = await uow.get(RegisterSourceHandler)
                        result = await handler.run(
                            RegisterSource(url=f"https://a.com/{n}", publisher="pub")
                        )
                        assert result.source_id == n
            finally:
                done.set()

        async def read() -> None:
            nonlocal reads
            while not done.is_set():
                async with container() as uow:
                    registry = await uow.get(SourceRegistry)
                    by_id = await uow.get(GetSourceByIdHandler)
                    by_url = await uow.get(GetSourceByUrlHandler)

                    count = await registry.count()
                    assert count <= await registry.next_source_id() - 1
                    for source_id in range(1, count + 1):
                        expected = SourceDetail(url=f"https://a.com/{source_id}", publisher="pub")
                        assert await by_id.run(GetSourceById(source_id=source_id)) == expected
                        assert await by_url.run(GetSourceByUrl(url=expected.url)) == expected
                    reads += 1
                await asyncio.sleep(0)

        try:
            await initialize_registry(container)
            await asyncio.gather(write(), read(), read(), read())

            async with container() as uow:
                registry = await uow.get(SourceRegistry)
                log = await uow.get(EventLog)

                assert await registry.count() == total
                assert await registry.next_source_id() == total + 1
                assert await log.count(event_types=["SourceRegistered"]) == total
        finally:
            await container.close()

        assert reads > 0


class TestStart:
    @pytest.mark.asyncio
    async def test_start_configures_and_initializes(self, monkeypatch: pytest.MonkeyPatch):
        from srcreg.application import startup

        calls: list[str] = []
        monkeypatch.setattr(startup, "configure_logging", lambda cfg: calls.append("logging"))
        monkeypatch.setattr(
            startup, "configure_observability", lambda cfg: calls.append("observability")
        )

        container = await startup.start(_memory_config())
        try:
            async with container() as uow:
                registry = await uow.get(SourceRegistry)
                assert await registry.repo.get_writer() == Principal.of("owner").id
        finally:
            await container.close()

        assert calls == ["logging", "observability"]
