"""Source domain value objects."""

import re
from typing import NewType

from pydantic import field_validator

from srcreg.domain.shared.model.value import RootValueObject

SourceId = NewType("SourceId", int)

NO_SOURCE = SourceId(0)
"""Sentinel meaning "no such record". Never assigned to a real record."""

FIRST_SOURCE_ID = SourceId(1)

_HEX_PATTERN = re.compile(r"^[0-9a-f]+$")


class Fingerprint(RootValueObject[str]):
    """Fixed-width hash of a URL, used as the URL index key.

    Stored as a lowercase hex digest. Two distinct URLs are assumed never to
    share a fingerprint; a true collision would make the second URL look like
    a duplicate of the first.
    """

    @field_validator("root")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not _HEX_PATTERN.match(v):
            raise ValueError(f"Fingerprint must be a lowercase hex digest: {v!r}")
        return v

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)
