from datetime import UTC, datetime
from typing import Any, Dict

from srcreg.domain.shared.error import InfrastructureError
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.value import SourceId


def row_to_source_record(row: Dict[str, Any]) -> SourceRecord:
    """Convert database row to SourceRecord."""
    return SourceRecord(url=row["url"], publisher=row["publisher"])


def source_record_to_dict(source_id: SourceId, record: SourceRecord) -> Dict[str, Any]:
    """Convert SourceRecord to database dict.

    Raises:
        InfrastructureError: A field holds text the database cannot store
            (lone surrogates are not valid UTF-8).
    """
    for name, value in (("url", record.url), ("publisher", record.publisher)):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InfrastructureError(
                f"Source {source_id} {name} is not valid UTF-8 text",
                code="unencodable_text",
            ) from e
    return {
        "id": int(source_id),
        "url": record.url,
        "publisher": record.publisher,
        "registered_at": datetime.now(UTC),
    }
