"""Source domain model."""

from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.fingerprint import Fingerprinter
from srcreg.domain.source.model.value import FIRST_SOURCE_ID, NO_SOURCE, Fingerprint, SourceId

__all__ = [
    "FIRST_SOURCE_ID",
    "NO_SOURCE",
    "Fingerprint",
    "Fingerprinter",
    "SourceId",
    "SourceRecord",
]
