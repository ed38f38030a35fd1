"""Identity hierarchy - base types for all caller identities."""

from dataclasses import dataclass

from srcreg.domain.auth.model.value import PrincipalId


@dataclass(frozen=True)
class Identity:
    """Base for all caller identities."""

    pass


@dataclass(frozen=True)
class Anonymous(Identity):
    """Caller without an established identity. Allowed to read only."""

    pass


@dataclass(frozen=True)
class Principal(Identity):
    """A caller whose identity has been established upstream."""

    id: PrincipalId

    @classmethod
    def of(cls, value: str) -> "Principal":
        return cls(id=PrincipalId(value))

    def __str__(self) -> str:
        return str(self.id)
