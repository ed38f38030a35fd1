"""Global test fixtures."""

import logfire
import pytest

from srcreg.domain.auth.model.identity import Principal
from srcreg.domain.shared.authorization.gate import writer_only
from srcreg.domain.shared.outbox import Outbox
from srcreg.domain.source.model.fingerprint import Fingerprinter
from srcreg.domain.source.service.registry import SourceRegistry
from srcreg.infrastructure.memory.repository import (
    InMemoryEventRepository,
    InMemorySourceRepository,
)

# Spans are created but never exported during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def writer() -> Principal:
    """The designated registry writer."""
    return Principal.of("owner")


@pytest.fixture
def stranger() -> Principal:
    """A principal that is not the writer."""
    return Principal.of("mallory")


@pytest.fixture
def source_repo() -> InMemorySourceRepository:
    return InMemorySourceRepository()


@pytest.fixture
def event_repo() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def registry(
    source_repo: InMemorySourceRepository,
    event_repo: InMemoryEventRepository,
    writer: Principal,
) -> SourceRegistry:
    """A registry over empty in-memory storage."""
    return SourceRegistry(
        repo=source_repo,
        outbox=Outbox(event_repo),
        fingerprinter=Fingerprinter(),
        gate=writer_only(writer),
    )
