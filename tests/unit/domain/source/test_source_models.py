"""Tests for the source domain model and its facts."""

import pytest
from pydantic import ValidationError

from srcreg.domain.shared.event import Event
from srcreg.domain.source.event.source_registered import SourceRegistered
from srcreg.domain.source.model.aggregate import SourceRecord
from srcreg.domain.source.model.value import FIRST_SOURCE_ID, NO_SOURCE, SourceId


class TestSourceRecord:
    def test_is_immutable(self):
        record = SourceRecord(url="https://a.com", publisher="Alpha")

        with pytest.raises(ValidationError):
            record.url = "https://b.com"  # type: ignore[misc]

    def test_as_pair(self):
        assert SourceRecord(url="u", publisher="p").as_pair() == ("u", "p")

    def test_equality_by_value(self):
        assert SourceRecord(url="u", publisher="p") == SourceRecord(url="u", publisher="p")


class TestSourceIds:
    def test_sentinel_precedes_first_id(self):
        assert NO_SOURCE == 0
        assert FIRST_SOURCE_ID == 1


class TestSourceRegistered:
    def test_is_registered_by_name(self):
        assert Event.lookup("SourceRegistered") is SourceRegistered

    def test_each_fact_gets_its_own_id(self):
        a = SourceRegistered(source_id=SourceId(1), url="u", publisher="p")
        b = SourceRegistered(source_id=SourceId(1), url="u", publisher="p")

        assert a.id != b.id

    def test_json_round_trip_preserves_payload(self):
        event = SourceRegistered(source_id=SourceId(3), url="https://a.com", publisher="Alpha")

        restored = SourceRegistered.model_validate(event.model_dump(mode="json"))

        assert restored.id == event.id
        assert restored.created_at == event.created_at
        assert (restored.source_id, restored.url, restored.publisher) == (3, "https://a.com", "Alpha")

    def test_is_immutable(self):
        event = SourceRegistered(source_id=SourceId(1), url="u", publisher="p")

        with pytest.raises(ValidationError):
            event.url = "other"  # type: ignore[misc]
