"""
Event Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_event_service
    service = create_event_service(settings)
"""
from typing import Optional

from core.config import EventServiceSettings, get_settings
from core.postgres_client import PostgresClientWrapper, create_postgres_client

from .event_service import EventService


def create_event_service(
    settings: Optional[EventServiceSettings] = None,
    db: Optional[PostgresClientWrapper] = None,
) -> EventService:
    """
    Create EventService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        settings: Service settings (defaults to the process settings)
        db: Database handle to share (created from settings when omitted)

    Returns:
        EventService instance with real dependencies
    """
    # Import real repository here (not at module level)
    from .event_repository import EventRepository

    if settings is None:
        settings = get_settings()
    if db is None:
        db = create_postgres_client(settings.service.service_name, config=settings.infra)

    repository = EventRepository(db=db, config=settings.infra)

    return EventService(
        repository=repository,
        report_version=settings.service.report_version,
    )
