import asyncio

from dishka import from_context, provide

from srcreg.config import Config
from srcreg.domain.auth.model.identity import Identity, Principal
from srcreg.domain.shared.authorization.gate import WriterOnly, writer_only
from srcreg.domain.shared.outbox import Outbox
from srcreg.domain.source.command.register import RegisterSourceHandler
from srcreg.domain.source.model.fingerprint import Fingerprinter
from srcreg.domain.source.port.repository import SourceRepository
from srcreg.domain.source.query.get_source import GetSourceByIdHandler, GetSourceByUrlHandler
from srcreg.domain.source.service.registry import SourceRegistry
from srcreg.util.di.base import Provider
from srcreg.util.di.scope import Scope


class SourceProvider(Provider):
    # The caller of a unit of work: container(context={Identity: ...})
    caller = from_context(provides=Identity, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_fingerprinter(self, config: Config) -> Fingerprinter:
        return Fingerprinter(config.registry.fingerprint)

    @provide(scope=Scope.APP)
    def get_writer_gate(self, config: Config) -> WriterOnly:
        return writer_only(Principal.of(config.registry.writer))

    # One lock for the whole application: every registry writes through it
    @provide(scope=Scope.APP)
    def get_write_lock(self) -> asyncio.Lock:
        return asyncio.Lock()

    @provide(scope=Scope.UOW)
    def get_registry(
        self,
        repo: SourceRepository,
        outbox: Outbox,
        fingerprinter: Fingerprinter,
        gate: WriterOnly,
        write_lock: asyncio.Lock,
    ) -> SourceRegistry:
        return SourceRegistry(
            repo=repo,
            outbox=outbox,
            fingerprinter=fingerprinter,
            gate=gate,
            write_lock=write_lock,
        )

    # Command Handlers
    register_handler = provide(RegisterSourceHandler, scope=Scope.UOW)

    # Query Handlers
    get_by_id_handler = provide(GetSourceByIdHandler, scope=Scope.UOW)
    get_by_url_handler = provide(GetSourceByUrlHandler, scope=Scope.UOW)
