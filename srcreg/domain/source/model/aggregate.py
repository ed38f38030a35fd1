"""SourceRecord - the immutable record stored under a SourceId."""

from pydantic import ConfigDict

from srcreg.domain.shared.model.entity import Entity


class SourceRecord(Entity):
    """A registered source: where it lives and who publishes it.

    No length or format rules apply to either field; empty strings are valid.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    publisher: str

    def as_pair(self) -> tuple[str, str]:
        return self.url, self.publisher
