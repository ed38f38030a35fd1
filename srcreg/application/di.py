from dishka import AsyncContainer, make_async_container, provide

from srcreg.config import Config
from srcreg.domain.source.util.di import SourceProvider
from srcreg.infrastructure.event.di import EventProvider
from srcreg.infrastructure.memory.di import MemoryStorageProvider
from srcreg.infrastructure.persistence.di import PersistenceProvider
from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope


class ConfigProvider(Provider):
    def __init__(self, config: Config) -> None:
        super().__init__()
        self._config = config

    @provide(scope=Scope.APP)
    def get_config(self) -> Config:
        return self._config


def create_container(config: Config | None = None) -> AsyncContainer:
    config = config or Config()
    storage = MemoryStorageProvider() if config.registry.storage == "memory" else PersistenceProvider()

    return make_async_container(
        ConfigProvider(config),
        storage,
        EventProvider(),
        SourceProvider(),
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
