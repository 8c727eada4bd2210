"""
Event Service Models

Event records, report queries and the external report view.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==================== Enums ====================

class ReportGrouping(str, Enum):
    """Report grouping key"""
    NONE = "none"           # single group with every match
    DAY = "day"             # calendar day of occurs_at (UTC)
    LOCATION = "location"   # normalized location


# ==================== Normalization helpers ====================

def normalize_location(value: Optional[str]) -> Optional[str]:
    """Trim and case-fold a location for matching and grouping"""
    if value is None:
        return None
    value = value.strip().casefold()
    return value or None


def parse_occurs_at(value: Any) -> datetime:
    """Parse a datetime or ISO-8601 string into an aware UTC datetime"""
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("occurs_at is required")
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"occurs_at is not a valid ISO-8601 datetime: {text!r}")
    elif not isinstance(value, datetime):
        raise ValueError("occurs_at must be a datetime or an ISO-8601 string")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError("occurs_at is out of range")


def _clean_optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ==================== Core Models ====================

class Event(BaseModel):
    """Validated, normalized event record (not yet persisted)"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(..., min_length=1, max_length=255, description="Event title")
    occurs_at: datetime = Field(..., description="When the event happens (UTC)")
    location: Optional[str] = Field(None, max_length=500, description="Where the event happens")
    description: Optional[str] = Field(None, description="Free-form description")
    attendees: List[str] = Field(default_factory=list, description="Attendee identifiers or names")

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("title cannot be empty or whitespace")
        return v

    @field_validator("occurs_at", mode="before")
    @classmethod
    def _parse_occurs_at(cls, v: Any) -> datetime:
        return parse_occurs_at(v)

    @field_validator("location", "description", mode="before")
    @classmethod
    def _strip_optional_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _clean_optional_text(v)
        return v

    @field_validator("attendees", mode="after")
    @classmethod
    def _canonical_attendees(cls, v: List[str]) -> List[str]:
        return sorted({name.strip() for name in v if name and name.strip()})

    @property
    def location_key(self) -> Optional[str]:
        """Normalized location used for filtering and grouping"""
        return normalize_location(self.location)

    @property
    def occurs_on(self) -> date:
        """Calendar day (UTC) the event occurs on"""
        return self.occurs_at.date()


class StoredEvent(Event):
    """Event as persisted in the document store"""

    event_id: str = Field(..., description="Opaque identifier assigned at creation")
    created_at: datetime = Field(..., description="Creation timestamp")

    def to_event(self) -> Event:
        return Event(**self.model_dump(exclude={"event_id", "created_at"}))


# ==================== Request Models ====================

class EventCreateRequest(BaseModel):
    """Event submission payload"""
    model_config = ConfigDict(extra="forbid")

    title: str
    occurs_at: datetime
    location: Optional[str] = None
    description: Optional[str] = None
    attendees: List[str] = Field(default_factory=list)


class ReportQuery(BaseModel):
    """
    Report query.

    The date range is inclusive on both ends and is interpreted as calendar
    days in UTC. An inverted range is rejected by the service with QueryError.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_date: Optional[date] = Field(None, description="First day included")
    end_date: Optional[date] = Field(None, description="Last day included")
    location: Optional[str] = Field(None, description="Location filter (case-insensitive)")
    group_by: ReportGrouping = Field(ReportGrouping.NONE, description="Grouping key")

    @field_validator("location", mode="before")
    @classmethod
    def _normalize_location(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_location(v)
        return v

    @property
    def has_inverted_range(self) -> bool:
        return (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        )


# ==================== Response Models ====================

class ReportGroupView(BaseModel):
    """One group of a report view"""
    key: str
    count: int
    event_ids: List[str]
    attendee_count: int = 0


class ReportView(BaseModel):
    """Versioned report shape returned to admin callers"""
    version: str
    group_by: ReportGrouping
    total_count: int
    groups: List[ReportGroupView]


class EventListResponse(BaseModel):
    """Event list response"""
    events: List[StoredEvent]
    total: int


__all__ = [
    "ReportGrouping",
    "normalize_location",
    "parse_occurs_at",
    "Event",
    "StoredEvent",
    "EventCreateRequest",
    "ReportQuery",
    "ReportGroupView",
    "ReportView",
    "EventListResponse",
]
