"""
Event Service Routes Registry
Defines all API routes exposed by the event service
"""

from typing import Any, Dict

SERVICE_ROUTES = [
    {
        "path": "/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check"
    },
    {
        "path": "/api/v1/events/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check (prefixed)"
    },
    # Events
    {
        "path": "/api/v1/events",
        "methods": ["GET", "POST"],
        "auth_required": True,
        "description": "List/submit events"
    },
    {
        "path": "/api/v1/events/{event_id}",
        "methods": ["GET", "DELETE"],
        "auth_required": True,
        "description": "Get/delete event"
    },
    # Reports
    {
        "path": "/api/v1/reports",
        "methods": ["GET"],
        "auth_required": True,
        "description": "Aggregated event report"
    },
]


def get_routes_summary() -> Dict[str, Any]:
    """
    Compact route metadata for registries and health dashboards
    """
    health_routes = []
    event_routes = []
    report_routes = []

    for route in SERVICE_ROUTES:
        path = route["path"]

        if "health" in path:
            health_routes.append("h")
        elif "/reports" in path:
            report_routes.append("r")
        elif "/events" in path:
            event_routes.append("e")

    return {
        "route_count": str(len(SERVICE_ROUTES)),
        "base_path": "/api/v1",
        "health": str(len(health_routes)),
        "events": str(len(event_routes)),
        "reports": str(len(report_routes)),
        "methods": "GET,POST,DELETE",
        "public_count": str(sum(1 for r in SERVICE_ROUTES if not r["auth_required"])),
        "protected_count": str(sum(1 for r in SERVICE_ROUTES if r["auth_required"])),
    }


# Service metadata
SERVICE_METADATA = {
    "service_name": "event_service",
    "version": "1.0.0",
    "tags": ["v1", "event-management", "event-reports"],
    "capabilities": [
        "event_submission",
        "event_lookup",
        "event_reports",
        "report_grouping",
    ]
}
