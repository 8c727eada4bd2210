"""
Event Service - Main Application

Event submission and admin reporting microservice
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Path, Query

from core.config import get_settings
from core.logger import setup_service_logger
from core.postgres_client import PostgresClientWrapper, create_postgres_client

from .event_service import EventService
from .factory import create_event_service
from .models import EventListResponse, ReportView, StoredEvent
from .protocols import EventValidationError, PersistenceError, QueryError
from .routes_registry import SERVICE_METADATA, get_routes_summary

# Initialize config
settings = get_settings()

# Setup logger
logger = setup_service_logger("event_service", settings.logging)


# Service instance
class EventMicroservice:
    def __init__(self):
        self.service: Optional[EventService] = None
        self.db: Optional[PostgresClientWrapper] = None

    async def initialize(self):
        self.db = create_postgres_client(settings.service.service_name, config=settings.infra)

        # Create service with real dependencies using factory
        self.service = create_event_service(settings=settings, db=self.db)

        try:
            await self.service.repo.ensure_schema()
        except PersistenceError as e:
            logger.error(f"❌ Event store unavailable at startup: {e}")
            raise

        logger.info("Event service initialized")

    async def shutdown(self):
        if self.db:
            try:
                await self.db.close()
                logger.info("Event store connection closed")
            except Exception as e:
                logger.error(f"Error closing event store connection: {e}")
        logger.info("Event service shutting down")


# Global instance
microservice = EventMicroservice()


# Lifespan management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    await microservice.initialize()
    yield
    await microservice.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Event Service",
    description="Event submission and aggregated admin reports",
    version=SERVICE_METADATA["version"],
    lifespan=lifespan,
)


def _require_service() -> EventService:
    if microservice.service is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return microservice.service


def _query_params(
    start_date: Optional[str],
    end_date: Optional[str],
    location: Optional[str],
    group_by: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "start_date": start_date,
        "end_date": end_date,
        "location": location,
        "group_by": group_by,
    }


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/v1/events/health")
@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "service": SERVICE_METADATA["service_name"],
        "version": SERVICE_METADATA["version"],
        "routes": get_routes_summary(),
    }


# =============================================================================
# Event Endpoints
# =============================================================================


@app.post("/api/v1/events", response_model=StoredEvent, status_code=201)
async def submit_event(payload: Dict[str, Any] = Body(...)):
    """
    Submit an event

    The payload is validated by the service; unknown fields are rejected.
    """
    service = _require_service()
    try:
        return await service.submit_event(payload)

    except EventValidationError as e:
        raise HTTPException(status_code=400, detail={"message": e.message, "errors": e.errors})
    except PersistenceError as e:
        logger.error(f"Error submitting event: {e}")
        raise HTTPException(status_code=503, detail="Event store unavailable, retry later")


@app.get("/api/v1/events", response_model=EventListResponse)
async def list_events(
    start_date: Optional[str] = Query(None, description="First day included (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Last day included (YYYY-MM-DD)"),
    location: Optional[str] = Query(None, description="Location filter"),
):
    """List events with optional filters"""
    service = _require_service()
    try:
        return await service.list_events(_query_params(start_date, end_date, location))

    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"Error listing events: {e}")
        raise HTTPException(status_code=503, detail="Event store unavailable, retry later")


@app.get("/api/v1/events/{event_id}", response_model=StoredEvent)
async def get_event(event_id: str = Path(..., description="Event ID")):
    """Get event details by ID"""
    service = _require_service()
    try:
        event = await service.get_event(event_id)
    except PersistenceError as e:
        logger.error(f"Error getting event: {e}")
        raise HTTPException(status_code=503, detail="Event store unavailable, retry later")

    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@app.delete("/api/v1/events/{event_id}", status_code=204)
async def delete_event(event_id: str = Path(..., description="Event ID")):
    """Delete an event"""
    service = _require_service()
    try:
        deleted = await service.delete_event(event_id)
    except PersistenceError as e:
        logger.error(f"Error deleting event: {e}")
        raise HTTPException(status_code=503, detail="Event store unavailable, retry later")

    if not deleted:
        raise HTTPException(status_code=404, detail="Event not found")
    return None


# =============================================================================
# Report Endpoints
# =============================================================================


@app.get("/api/v1/reports", response_model=ReportView)
async def generate_report(
    start_date: Optional[str] = Query(None, description="First day included (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Last day included (YYYY-MM-DD)"),
    location: Optional[str] = Query(None, description="Location filter"),
    group_by: Optional[str] = Query(None, description="Grouping key (none, day, location)"),
):
    """Aggregated event report for administrators"""
    service = _require_service()
    try:
        return await service.generate_report(
            _query_params(start_date, end_date, location, group_by)
        )

    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"Error generating report: {e}")
        raise HTTPException(status_code=503, detail="Event store unavailable, retry later")


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.event_service.main:app",
        host=settings.service.service_host,
        port=settings.service.service_port,
        reload=settings.debug,
    )
