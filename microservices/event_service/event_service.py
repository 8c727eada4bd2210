"""
Event Service - Business Logic

Submission and reporting over an injected event store.

Uses dependency injection for testability.
- Store is injected, not created at import time
- Reports are always derived from a fresh snapshot (no caching)
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel

from .aggregation import aggregate
from .models import EventListResponse, ReportQuery, ReportView, StoredEvent
from .presentation import REPORT_VERSION, present

# Import protocols (no I/O dependencies) - NOT the concrete repository!
from .protocols import EventStoreProtocol
from .validation import parse_report_query, validate

logger = logging.getLogger(__name__)


class EventService:
    """
    Event service business logic

    Validates submissions before they reach the store and turns store
    snapshots into report views.
    """

    def __init__(
        self,
        repository: EventStoreProtocol,
        report_version: str = REPORT_VERSION,
    ):
        """
        Initialize service with injected dependencies.

        Args:
            repository: Event store (inject an in-memory store for testing)
            report_version: Version tag stamped on report views
        """
        self.repo = repository
        self.report_version = report_version

    async def submit_event(
        self, raw: Union[Mapping[str, Any], BaseModel]
    ) -> StoredEvent:
        """
        Validate and persist an event.

        Raises:
            EventValidationError: candidate rejected; nothing is written
            PersistenceError: store unreachable or write failed
        """
        event = validate(raw)
        stored = await self.repo.create(event)
        logger.info(f"Created event {stored.event_id} occurring at {stored.occurs_at.isoformat()}")
        return stored

    async def get_event(self, event_id: str) -> Optional[StoredEvent]:
        return await self.repo.get_by_id(event_id)

    async def list_events(
        self, query: Union[Mapping[str, Any], ReportQuery, None] = None
    ) -> EventListResponse:
        """List stored events matching the query's date range and location"""
        query = parse_report_query(query)
        events = await self.repo.list_by_filter(
            start_date=query.start_date,
            end_date=query.end_date,
            location=query.location,
        )
        events = sorted(events, key=lambda e: (e.occurs_at, e.event_id))
        return EventListResponse(events=events, total=len(events))

    async def delete_event(self, event_id: str) -> bool:
        deleted = await self.repo.delete(event_id)
        if deleted:
            logger.info(f"Deleted event {event_id}")
        return deleted

    async def generate_report(
        self, query: Union[Mapping[str, Any], ReportQuery, None] = None
    ) -> ReportView:
        """
        Build a report from a fresh snapshot.

        Raises:
            QueryError: malformed query; the store is not touched
            PersistenceError: store unreachable
        """
        query = parse_report_query(query)

        snapshot: List[StoredEvent] = await self.repo.list_by_filter(
            start_date=query.start_date,
            end_date=query.end_date,
            location=query.location,
        )
        result = aggregate(snapshot, query)

        logger.info(
            f"Generated report group_by={query.group_by.value} "
            f"groups={len(result.groups)} total={result.total_count}"
        )
        return present(result, version=self.report_version)


__all__ = ["EventService"]
