"""
Event Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Event, StoredEvent


# Custom exceptions - defined here to avoid importing repository
class EventServiceError(Exception):
    """Base exception for event service errors"""
    pass


class EventValidationError(EventServiceError):
    """Candidate event failed validation; safe to report to the caller verbatim"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class PersistenceError(EventServiceError):
    """Document store unreachable or write failed; the caller may retry"""
    pass


class QueryError(EventServiceError):
    """Malformed report query; rejected before the store is touched"""
    pass


@runtime_checkable
class EventStoreProtocol(Protocol):
    """
    Interface for the Event Store Adapter.

    Implementations own the persisted event documents.
    Used for dependency injection to enable testing.
    """

    async def create(self, event: Event) -> StoredEvent:
        """Assign an identifier, persist the event and return the stored form"""
        ...

    async def list_all(self) -> List[StoredEvent]:
        """Return the current snapshot (no ordering guarantee)"""
        ...

    async def list_by_filter(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        location: Optional[str] = None,
    ) -> List[StoredEvent]:
        """Return events within the inclusive day range and location"""
        ...

    async def get_by_id(self, event_id: str) -> Optional[StoredEvent]:
        """Get event by ID"""
        ...

    async def delete(self, event_id: str) -> bool:
        """Delete an event"""
        ...

    async def count(self) -> int:
        """Number of stored events"""
        ...
