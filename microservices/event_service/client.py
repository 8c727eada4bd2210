"""
Event Service Client

Client library for other microservices to submit events and fetch reports
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

import httpx

from core.config import get_settings

logger = logging.getLogger(__name__)


def _iso(value: Union[date, datetime, str, None]) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return value.isoformat()


class EventServiceClient:
    """Event Service HTTP client"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Event Service client

        Args:
            base_url: Event service base URL, defaults to EVENT_SERVICE_URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            self.base_url = get_settings().service.event_service_url.rstrip('/')

        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {path} failed: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise

    # =============================================================================
    # Events
    # =============================================================================

    async def submit_event(
        self,
        title: str,
        occurs_at: Union[datetime, str],
        location: Optional[str] = None,
        description: Optional[str] = None,
        attendees: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Submit an event

        Args:
            title: Event title
            occurs_at: When the event happens
            location: Where the event happens
            description: Free-form description
            attendees: Attendee identifiers or names

        Returns:
            Stored event data (includes event_id)

        Example:
            >>> async with EventServiceClient("http://localhost:8230") as client:
            ...     event = await client.submit_event(
            ...         title="Team Offsite",
            ...         occurs_at=datetime(2025, 10, 23, 10, 0, tzinfo=timezone.utc),
            ...         location="Berlin",
            ...         attendees=["alice", "bob"],
            ...     )
        """
        payload: Dict[str, Any] = {"title": title, "occurs_at": _iso(occurs_at)}
        if location is not None:
            payload["location"] = location
        if description is not None:
            payload["description"] = description
        if attendees:
            payload["attendees"] = list(attendees)

        response = await self._request("POST", "/api/v1/events", json=payload)
        return response.json()

    async def get_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        """Get an event, or None when it does not exist"""
        try:
            response = await self._request("GET", f"/api/v1/events/{event_id}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise
        return response.json()

    async def list_events(
        self,
        start_date: Union[date, str, None] = None,
        end_date: Union[date, str, None] = None,
        location: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List events with optional filters"""
        params = {
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
            "location": location,
        }
        params = {k: v for k, v in params.items() if v is not None}

        response = await self._request("GET", "/api/v1/events", params=params)
        return response.json()

    async def delete_event(self, event_id: str) -> bool:
        """Delete an event; False when it does not exist"""
        try:
            await self._request("DELETE", f"/api/v1/events/{event_id}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return False
            raise
        return True

    # =============================================================================
    # Reports
    # =============================================================================

    async def generate_report(
        self,
        start_date: Union[date, str, None] = None,
        end_date: Union[date, str, None] = None,
        location: Optional[str] = None,
        group_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Fetch an aggregated report

        Args:
            start_date: First day included
            end_date: Last day included
            location: Location filter (case-insensitive)
            group_by: "none", "day" or "location"

        Returns:
            Report view: {version, group_by, total_count, groups}
        """
        params = {
            "start_date": _iso(start_date),
            "end_date": _iso(end_date),
            "location": location,
            "group_by": group_by,
        }
        params = {k: v for k, v in params.items() if v is not None}

        response = await self._request("GET", "/api/v1/reports", params=params)
        return response.json()

    # =============================================================================
    # Health
    # =============================================================================

    async def health_check(self) -> bool:
        """Check service health"""
        try:
            response = await self._request("GET", "/health")
        except httpx.HTTPError:
            return False
        return response.json().get("status") == "healthy"


__all__ = ["EventServiceClient"]
