"""Application startup: logging, observability, schema and writer pinning."""

import logging

import logfire
from dishka import AsyncContainer
from sqlalchemy.ext.asyncio import AsyncEngine

from srcreg.application.di import create_container
from srcreg.config import Config, configure_logging
from srcreg.domain.source.service.registry import SourceRegistry
from srcreg.infrastructure.persistence.database import init_db

logger = logging.getLogger(__name__)


def configure_observability(config: Config) -> None:
    """Configure logfire spans; nothing leaves the process without a token."""
    logfire.configure(
        service_name=config.observability.service_name,
        send_to_logfire=config.observability.send_to_logfire,
        console=False,
    )


async def initialize_registry(container: AsyncContainer) -> None:
    """Create storage if needed and pin the writer identity.

    Raises:
        ConfigurationError: Storage already belongs to another writer.
    """
    config = await container.get(Config)
    if config.registry.storage == "database":
        engine = await container.get(AsyncEngine)
        await init_db(engine)

    async with container() as uow:
        registry = await uow.get(SourceRegistry)
        await registry.initialize()

    logger.info(
        "Registry ready: storage=%s, writer=%s", config.registry.storage, config.registry.writer
    )


async def start(config: Config | None = None) -> AsyncContainer:
    """Build a ready-to-use container. Close it with ``await container.close()``."""
    config = config or Config()
    configure_logging(config.logging)
    configure_observability(config)

    container = create_container(config)
    await initialize_registry(container)
    return container
