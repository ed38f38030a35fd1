"""SourceRegistry - the single entry point to the source registry."""

import asyncio
import logging
from dataclasses import field

from srcreg.domain.auth.model.identity import Identity
from srcreg.domain.shared.authorization.gate import WriterOnly
from srcreg.domain.shared.error import (
    ConfigurationError,
    DuplicateEntryError,
    NotFoundError,
    UnauthorizedError,
)
from srcreg.domain.shared.outbox import Outbox
from srcreg.domain.shared.service import Service
from srcreg.domain.source.event.source_registered import SourceRegistered
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.fingerprint import Fingerprinter
from srcreg.domain.source.model.value import NO_SOURCE, SourceId
from srcreg.domain.source.port.repository import SourceRepository

logger = logging.getLogger(__name__)


class SourceRegistry(Service):
    """Append-only registry of sources, addressable by id and by URL.

    Owns the record store and the URL index (both behind ``repo``) and keeps
    them in step: every registration writes both or neither. Only the writer
    admitted by ``gate`` may register; anyone may read.

    ``write_lock`` serialises registrations. Share one lock between every
    registry instance that writes to the same storage.
    """

    repo: SourceRepository
    outbox: Outbox
    fingerprinter: Fingerprinter
    gate: WriterOnly
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def initialize(self) -> None:
        """Pin the writer identity in storage, or verify the pinned one.

        Raises:
            ConfigurationError: Storage was initialized for a different writer.
        """
        writer = self.gate.writer.id
        stored = await self.repo.get_writer()
        if stored is None:
            await self.repo.set_writer(writer)
            logger.info("Registry initialized for writer %s", writer)
        elif stored != writer:
            raise ConfigurationError(
                f"Registry storage belongs to writer {stored}, not {writer}"
            )

    async def register(self, caller: Identity, url: str, publisher: str) -> SourceId:
        """Register a new source and return its id.

        Raises:
            UnauthorizedError: caller is not the writer. Nothing is read.
            DuplicateEntryError: url is already registered. Nothing is written.
        """
        if not self.gate.allows(caller):
            raise UnauthorizedError("Only the registry writer may register sources")

        fingerprint = self.fingerprinter(url)

        async with self.write_lock:
            existing = await self.repo.find_id_by_fingerprint(fingerprint)
            if existing is not None and existing != NO_SOURCE:
                raise DuplicateEntryError(
                    f"URL already registered as source {existing}",
                    fingerprint=str(fingerprint),
                )

            source_id = await self.repo.next_id()
            record = SourceRecord(url=url, publisher=publisher)
            await self.repo.insert(source_id, record, fingerprint)
            logger.debug("Source %s committed (fingerprint %s)", source_id, fingerprint)

            # Appended under the lock so facts arrive in id order
            await self.outbox.append(
                SourceRegistered(source_id=source_id, url=url, publisher=publisher)
            )

        return source_id

    async def get_by_id(self, source_id: SourceId) -> SourceRecord:
        """Return the record stored under source_id.

        Raises:
            NotFoundError: No record has that id.
        """
        record = await self.repo.get(source_id) if source_id != NO_SOURCE else None
        if record is None:
            raise NotFoundError(f"Source not found: {source_id}")
        return record

    async def get_by_url(self, url: str) -> SourceRecord:
        """Return the record registered for url.

        Raises:
            NotFoundError: url was never registered.
        """
        source_id = await self.repo.find_id_by_fingerprint(self.fingerprinter(url))
        if source_id is None or source_id == NO_SOURCE:
            raise NotFoundError(f"No source registered for URL: {url}")
        return await self.get_by_id(source_id)

    async def next_source_id(self) -> SourceId:
        """The id the next successful registration will receive."""
        return await self.repo.next_id()

    async def count(self) -> int:
        return await self.repo.count()
