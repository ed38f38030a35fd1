"""SQLAlchemy implementation of SourceRepository."""

import logging

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from srcreg.domain.auth.model.value import PrincipalId
from srcreg.domain.shared.error import (
    ConflictError,
    DuplicateEntryError,
    StorageUnavailableError,
)
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.value import FIRST_SOURCE_ID, Fingerprint, SourceId
from srcreg.domain.source.port.repository import SourceRepository
from srcreg.infrastructure.persistence.mappers.source import (
    row_to_source_record,
    source_record_to_dict,
)
from srcreg.infrastructure.persistence.tables import (
    STATE_ROW_ID,
    registry_state_table,
    sources_table,
    url_index_table,
)

logger = logging.getLogger(__name__)


class SQLAlchemySourceRepository(SourceRepository):
    """SQL-backed record store and URL index.

    insert() writes the record row, the index row and the counter in one
    transaction and commits it before returning. The unique key on the
    fingerprint backs up the registry's own duplicate check.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, source_id: SourceId) -> SourceRecord | None:
        stmt = select(sources_table).where(sources_table.c.id == int(source_id))
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return row_to_source_record(dict(row)) if row else None

    async def find_id_by_fingerprint(self, fingerprint: Fingerprint) -> SourceId | None:
        stmt = select(url_index_table.c.source_id).where(
            url_index_table.c.fingerprint == str(fingerprint)
        )
        result = await self._session.execute(stmt)
        source_id = result.scalar_one_or_none()
        return SourceId(source_id) if source_id is not None else None

    async def next_id(self) -> SourceId:
        stmt = select(registry_state_table.c.next_source_id).where(
            registry_state_table.c.id == STATE_ROW_ID
        )
        result = await self._session.execute(stmt)
        next_id = result.scalar_one_or_none()
        return SourceId(next_id) if next_id is not None else FIRST_SOURCE_ID

    async def insert(
        self, source_id: SourceId, record: SourceRecord, fingerprint: Fingerprint
    ) -> None:
        try:
            await self._session.execute(
                insert(sources_table).values(**source_record_to_dict(source_id, record))
            )
            await self._session.execute(
                insert(url_index_table).values(
                    fingerprint=str(fingerprint), source_id=int(source_id)
                )
            )
            advanced = await self._session.execute(
                update(registry_state_table)
                .where(
                    registry_state_table.c.id == STATE_ROW_ID,
                    registry_state_table.c.next_source_id == int(source_id),
                )
                .values(next_source_id=int(source_id) + 1)
            )
            if advanced.rowcount != 1:
                raise ConflictError(f"Source id {source_id} is not the next id to assign")
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            logger.debug("Insert of source %s rejected by constraint: %s", source_id, e)
            raise DuplicateEntryError(
                f"URL already registered (fingerprint {fingerprint})",
                fingerprint=str(fingerprint),
            ) from e
        except ConflictError:
            await self._session.rollback()
            raise
        except OperationalError as e:
            await self._session.rollback()
            logger.error("Storage unavailable while inserting source %s: %s", source_id, e)
            raise StorageUnavailableError(f"Could not write source {source_id}") from e

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(sources_table))
        return result.scalar_one()

    async def get_writer(self) -> PrincipalId | None:
        stmt = select(registry_state_table.c.writer).where(
            registry_state_table.c.id == STATE_ROW_ID
        )
        result = await self._session.execute(stmt)
        writer = result.scalar_one_or_none()
        return PrincipalId(writer) if writer else None

    async def set_writer(self, writer: PrincipalId) -> None:
        stmt = (
            update(registry_state_table)
            .where(registry_state_table.c.id == STATE_ROW_ID)
            .values(writer=str(writer))
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            await self._session.execute(
                insert(registry_state_table).values(
                    id=STATE_ROW_ID, next_source_id=FIRST_SOURCE_ID, writer=str(writer)
                )
            )
        await self._session.commit()
