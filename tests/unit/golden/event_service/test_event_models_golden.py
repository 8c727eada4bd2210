"""
Unit Golden Tests: Event Service Models

Tests model validation and serialization without external dependencies.
"""
import pytest
from datetime import date, datetime, timezone
from pydantic import ValidationError

from microservices.event_service.models import (
    Event,
    ReportGrouping,
    ReportQuery,
    StoredEvent,
    normalize_location,
)
from tests.contracts.event import EventTestDataFactory

pytestmark = [pytest.mark.unit, pytest.mark.golden]


class TestReportGrouping:
    """Test ReportGrouping enum"""

    def test_grouping_values(self):
        assert ReportGrouping.NONE.value == "none"
        assert ReportGrouping.DAY.value == "day"
        assert ReportGrouping.LOCATION.value == "location"


class TestStoredEvent:
    """Test StoredEvent model"""

    def test_identifier_is_immutable(self):
        stored = StoredEvent(
            event_id=EventTestDataFactory.make_event_id(),
            title=EventTestDataFactory.make_title(),
            occurs_at=EventTestDataFactory.make_occurs_at(),
            created_at=EventTestDataFactory.make_timestamp(),
        )

        with pytest.raises(ValidationError):
            stored.event_id = EventTestDataFactory.make_event_id()

    def test_to_event_drops_storage_fields(self):
        stored = StoredEvent(
            event_id=EventTestDataFactory.make_event_id(),
            title=EventTestDataFactory.make_title(),
            occurs_at=EventTestDataFactory.make_occurs_at(),
            location="Hall",
            attendees=["bob"],
            created_at=EventTestDataFactory.make_timestamp(),
        )

        event = stored.to_event()

        assert type(event) is Event
        assert event.title == stored.title
        assert event.attendees == ["bob"]

    def test_json_round_trip(self):
        stored = StoredEvent(
            event_id=EventTestDataFactory.make_event_id(),
            title=EventTestDataFactory.make_title(),
            occurs_at=EventTestDataFactory.make_occurs_at(),
            created_at=EventTestDataFactory.make_timestamp(),
        )

        restored = StoredEvent.model_validate_json(stored.model_dump_json())

        assert restored == stored

    def test_location_key_is_case_folded(self):
        event = Event(
            title=EventTestDataFactory.make_title(),
            occurs_at=EventTestDataFactory.make_occurs_at(),
            location="  Main HALL ",
        )

        assert event.location == "Main HALL"
        assert event.location_key == "main hall"


class TestReportQuery:
    """Test ReportQuery model"""

    def test_defaults(self):
        query = ReportQuery()

        assert query.start_date is None
        assert query.end_date is None
        assert query.location is None
        assert query.group_by == ReportGrouping.NONE

    def test_parses_iso_dates(self):
        query = ReportQuery(start_date="2024-01-01", end_date="2024-01-31", group_by="day")

        assert query.start_date == date(2024, 1, 1)
        assert query.end_date == date(2024, 1, 31)
        assert query.group_by == ReportGrouping.DAY

    def test_location_is_normalized(self):
        assert ReportQuery(location=" Berlin ").location == "berlin"
        assert ReportQuery(location="   ").location is None

    def test_inverted_range_is_detected(self):
        query = ReportQuery(start_date=date(2024, 1, 2), end_date=date(2024, 1, 1))

        assert query.has_inverted_range is True

    def test_unknown_grouping_rejected(self):
        with pytest.raises(ValidationError):
            ReportQuery(group_by="week")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ReportQuery(category="work")


class TestNormalizeLocation:
    """Test normalize_location helper"""

    def test_none(self):
        assert normalize_location(None) is None

    def test_blank(self):
        assert normalize_location("  ") is None

    def test_case_and_whitespace(self):
        assert normalize_location(" Room A ") == "room a"
