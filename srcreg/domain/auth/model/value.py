"""Value objects for the auth domain."""

from pydantic import RootModel, field_validator


class PrincipalId(RootModel[str]):
    """Stable identifier of a caller, e.g. an account name or address.

    How the identifier was established (tokens, signatures) is decided
    outside the registry; the registry only compares identifiers.
    """

    @field_validator("root")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Principal id must not be blank")
        return v

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)
