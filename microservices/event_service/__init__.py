"""
Event Service Microservice

Event submission and admin reporting: events are validated, stored as
documents, and aggregated on demand into versioned report views.
"""

from .aggregation import ReportGroup, ReportResult, aggregate
from .event_service import EventService
from .models import (
    Event,
    EventCreateRequest,
    ReportGrouping,
    ReportQuery,
    ReportView,
    StoredEvent,
)
from .presentation import present
from .protocols import (
    EventServiceError,
    EventStoreProtocol,
    EventValidationError,
    PersistenceError,
    QueryError,
)
from .validation import parse_report_query, validate

__version__ = "1.0.0"
__all__ = [
    "EventService",
    "EventStoreProtocol",
    "Event",
    "StoredEvent",
    "EventCreateRequest",
    "ReportGrouping",
    "ReportQuery",
    "ReportView",
    "ReportGroup",
    "ReportResult",
    "EventServiceError",
    "EventValidationError",
    "PersistenceError",
    "QueryError",
    "aggregate",
    "present",
    "validate",
    "parse_report_query",
]
