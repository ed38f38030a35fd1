"""SourceRepository port - persistence interface for the registry's state."""

from abc import abstractmethod
from typing import Protocol

from srcreg.domain.auth.model.value import PrincipalId
from srcreg.domain.shared.port import Port
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.value import Fingerprint, SourceId


class SourceRepository(Port, Protocol):
    """Record store, URL index and id counter behind one interface.

    Implementations must apply insert() as a single unit: a reader sees
    either none or all of the record, its index entry and the advanced
    counter.
    """

    @abstractmethod
    async def get(self, source_id: SourceId) -> SourceRecord | None: ...

    @abstractmethod
    async def find_id_by_fingerprint(self, fingerprint: Fingerprint) -> SourceId | None:
        """Resolve a fingerprint through the URL index. None when unindexed."""
        ...

    @abstractmethod
    async def next_id(self) -> SourceId:
        """The id the next insert must use."""
        ...

    @abstractmethod
    async def insert(
        self, source_id: SourceId, record: SourceRecord, fingerprint: Fingerprint
    ) -> None:
        """Store the record, index its fingerprint and advance the counter.

        Raises:
            DuplicateEntryError: The fingerprint is already indexed.
            ConflictError: source_id is not the current next id.
        """
        ...

    @abstractmethod
    async def count(self) -> int: ...

    @abstractmethod
    async def get_writer(self) -> PrincipalId | None:
        """The writer identity pinned at initialization, if any."""
        ...

    @abstractmethod
    async def set_writer(self, writer: PrincipalId) -> None: ...
