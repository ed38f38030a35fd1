"""Authorization gates evaluated before any registry state is touched."""

from __future__ import annotations

from dataclasses import dataclass

from srcreg.domain.auth.model.identity import Identity, Principal


class Gate:
    """Base for authorization gates."""

    def allows(self, identity: Identity) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Public(Gate):
    """No identity required."""

    def allows(self, identity: Identity) -> bool:
        return True


@dataclass(frozen=True)
class WriterOnly(Gate):
    """Only the single designated writer passes."""

    writer: Principal

    def allows(self, identity: Identity) -> bool:
        return isinstance(identity, Principal) and identity.id == self.writer.id


_PUBLIC = Public()


def public() -> Public:
    """Gate for read paths (no identity required)."""
    return _PUBLIC


def writer_only(writer: Principal) -> WriterOnly:
    """Gate that admits only the given writer."""
    return WriterOnly(writer=writer)
