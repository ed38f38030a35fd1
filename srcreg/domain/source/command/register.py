import logfire

from srcreg.domain.auth.model.identity import Identity
from srcreg.domain.shared.command import Command, CommandHandler, Result
from srcreg.domain.source.model.value import SourceId
from srcreg.domain.source.service.registry import SourceRegistry


class RegisterSource(Command):
    url: str
    publisher: str


class SourceRegisteredResult(Result):
    source_id: SourceId


class RegisterSourceHandler(CommandHandler[RegisterSource, SourceRegisteredResult]):
    registry: SourceRegistry
    principal: Identity

    async def run(self, cmd: RegisterSource) -> SourceRegisteredResult:
        with logfire.span("RegisterSource", url=cmd.url, publisher=cmd.publisher):
            source_id = await self.registry.register(self.principal, cmd.url, cmd.publisher)
            return SourceRegisteredResult(source_id=source_id)
