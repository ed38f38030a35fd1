import logfire

from srcreg.domain.shared.authorization.gate import public
from srcreg.domain.shared.query import Query, QueryHandler, Result
from srcreg.domain.source.model.value import SourceId
from srcreg.domain.source.service.registry import SourceRegistry


class GetSourceById(Query):
    source_id: SourceId


class GetSourceByUrl(Query):
    url: str


class SourceDetail(Result):
    url: str
    publisher: str


class GetSourceByIdHandler(QueryHandler[GetSourceById, SourceDetail]):
    __auth__ = public()
    registry: SourceRegistry

    async def run(self, query: GetSourceById) -> SourceDetail:
        with logfire.span("GetSourceById", source_id=query.source_id):
            record = await self.registry.get_by_id(query.source_id)
            return SourceDetail(url=record.url, publisher=record.publisher)


class GetSourceByUrlHandler(QueryHandler[GetSourceByUrl, SourceDetail]):
    __auth__ = public()
    registry: SourceRegistry

    async def run(self, query: GetSourceByUrl) -> SourceDetail:
        # Lookups are silent: no fact is appended on this path
        with logfire.span("GetSourceByUrl", url=query.url):
            record = await self.registry.get_by_url(query.url)
            return SourceDetail(url=record.url, publisher=record.publisher)
