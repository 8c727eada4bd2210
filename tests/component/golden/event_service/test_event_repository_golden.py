"""
Component Golden Tests: Event Repository

Tests the PostgreSQL document-store adapter against a mock database client:
SQL shape, parameter binding, document decoding and error classification.
"""
import asyncio
import json

import asyncpg
import pytest
from datetime import date, datetime, timezone

from core.config import InfraConfig
from microservices.event_service.event_repository import EventRepository
from microservices.event_service.event_service import EventService
from microservices.event_service.models import Event, StoredEvent
from microservices.event_service.protocols import PersistenceError
from tests.component.mocks import MockPostgresClient
from tests.contracts.event import EventTestDataFactory

pytestmark = [pytest.mark.component, pytest.mark.golden]


def make_document(**overrides) -> str:
    document = {
        "event_id": EventTestDataFactory.make_event_id(),
        "title": EventTestDataFactory.make_title(),
        "occurs_at": "2024-01-01T12:00:00Z",
        "location": None,
        "description": None,
        "attendees": [],
        "created_at": "2024-01-01T08:00:00Z",
    }
    document.update(overrides)
    return json.dumps(document)


@pytest.fixture
def db():
    return MockPostgresClient()


@pytest.fixture
def repo(db):
    return EventRepository(db=db, config=InfraConfig(events_schema="events", events_collection="event_documents"))


class TestCreate:

    @pytest.mark.asyncio
    async def test_insert_document(self, repo, db):
        event = Event(
            title=EventTestDataFactory.make_title(),
            occurs_at=datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
            location=" Main Hall ",
            attendees=["bob", "alice"],
        )

        stored = await repo.create(event)

        assert isinstance(stored, StoredEvent)
        assert stored.event_id.startswith("evt_")
        db.assert_query_executed("INSERT INTO events.event_documents", method="execute")

        _, _, params = db.get_last_query()
        assert params[0] == stored.event_id
        document = json.loads(params[1])
        assert document["title"] == event.title
        assert document["attendees"] == ["alice", "bob"]
        assert params[2] == event.occurs_at
        assert params[3] == "main hall"

    @pytest.mark.asyncio
    async def test_identifiers_are_unique(self, repo):
        event = Event(title=EventTestDataFactory.make_title(), occurs_at=EventTestDataFactory.make_occurs_at())

        first = await repo.create(event)
        second = await repo.create(event)

        assert first.event_id != second.event_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            OSError("connection refused"),
            asyncio.TimeoutError(),
            asyncpg.PostgresError("write failed"),
            asyncpg.InterfaceError("pool is closed"),
        ],
    )
    async def test_store_failures_become_persistence_error(self, repo, db, error):
        db.set_error(error)
        event = Event(title=EventTestDataFactory.make_title(), occurs_at=EventTestDataFactory.make_occurs_at())

        with pytest.raises(PersistenceError):
            await repo.create(event)


class TestListByFilter:

    @pytest.mark.asyncio
    async def test_no_filters(self, repo, db):
        await repo.list_by_filter()

        _, sql, params = db.get_last_query()
        assert "WHERE TRUE" in sql
        assert params == []

    @pytest.mark.asyncio
    async def test_day_range_becomes_half_open_bounds(self, repo, db):
        await repo.list_by_filter(start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))

        _, sql, params = db.get_last_query()
        assert "occurs_at >= $1" in sql
        assert "occurs_at < $2" in sql
        assert params == [
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            datetime(2024, 1, 2, tzinfo=timezone.utc),
        ]

    @pytest.mark.asyncio
    async def test_last_representable_end_day_is_open_above(self, repo, db):
        await repo.list_by_filter(start_date=date(2024, 1, 1), end_date=date.max)

        _, sql, params = db.get_last_query()
        assert "occurs_at >= $1" in sql
        assert "occurs_at <" not in sql
        assert params == [datetime(2024, 1, 1, tzinfo=timezone.utc)]

    @pytest.mark.asyncio
    async def test_report_up_to_last_representable_day(self, repo, db):
        event_id = EventTestDataFactory.make_event_id()
        db.set_rows_response([{"document": make_document(event_id=event_id)}])
        service = EventService(repository=repo)

        view = await service.generate_report({"start_date": "2024-01-01", "end_date": "9999-12-31"})

        assert view.total_count == 1
        assert view.groups[0].event_ids == [event_id]

    @pytest.mark.asyncio
    async def test_location_is_normalized(self, repo, db):
        await repo.list_by_filter(location="  BERLIN ")

        _, sql, params = db.get_last_query()
        assert "location_key = $1" in sql
        assert params == ["berlin"]

    @pytest.mark.asyncio
    async def test_documents_are_decoded(self, repo, db):
        first_id = EventTestDataFactory.make_event_id()
        second_id = EventTestDataFactory.make_event_id()
        db.set_rows_response([
            {"document": make_document(event_id=first_id, attendees=["a"])},
            {"document": json.loads(make_document(event_id=second_id))},
        ])

        events = await repo.list_all()

        assert [e.event_id for e in events] == [first_id, second_id]
        assert events[0].attendees == ["a"]
        assert events[0].occurs_at == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_read_failure(self, repo, db):
        db.set_error(OSError("unreachable"))

        with pytest.raises(PersistenceError):
            await repo.list_by_filter(location="x")


class TestGetDeleteCount:

    @pytest.mark.asyncio
    async def test_get_missing(self, repo, db):
        db.set_row_response(None)

        assert await repo.get_by_id(EventTestDataFactory.make_event_id()) is None

    @pytest.mark.asyncio
    async def test_get_existing(self, repo, db):
        event_id = EventTestDataFactory.make_event_id()
        db.set_row_response({"document": make_document(event_id=event_id)})

        event = await repo.get_by_id(event_id)

        assert event.event_id == event_id
        _, _, params = db.get_last_query()
        assert params == [event_id]

    @pytest.mark.asyncio
    async def test_delete_reports_affected_rows(self, repo, db):
        db.set_execute_response("DELETE 1")
        assert await repo.delete(EventTestDataFactory.make_event_id()) is True

        db.set_execute_response("DELETE 0")
        assert await repo.delete(EventTestDataFactory.make_event_id()) is False

    @pytest.mark.asyncio
    async def test_count(self, repo, db):
        db.set_row_response({"total": 5})

        assert await repo.count() == 5


class TestEnsureSchema:

    @pytest.mark.asyncio
    async def test_creates_collection_and_indexes(self, repo, db):
        await repo.ensure_schema()

        db.assert_query_executed("CREATE SCHEMA IF NOT EXISTS events")
        db.assert_query_executed("CREATE TABLE IF NOT EXISTS events.event_documents")
        db.assert_query_executed("occurs_at_idx")
        db.assert_query_executed("location_idx")

    @pytest.mark.asyncio
    async def test_unreachable_store(self, repo, db):
        db.set_error(OSError("unreachable"))

        with pytest.raises(PersistenceError):
            await repo.ensure_schema()
