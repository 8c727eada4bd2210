"""
Aggregation Engine

Computes report groups from an event snapshot. Pure and deterministic: the
snapshot is never mutated and group order never depends on store order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Event, ReportGrouping, ReportQuery, StoredEvent
from .validation import ensure_valid_query

# Key of the single group emitted for ungrouped reports and empty results
ALL_EVENTS_KEY = "all"

# Group key for events without a location when grouping by location
NO_LOCATION_KEY = ""


@dataclass(frozen=True)
class ReportGroup:
    """Internal group representation"""
    key: str
    count: int
    event_ids: Tuple[str, ...]
    attendee_count: int = 0


@dataclass(frozen=True)
class ReportResult:
    """Ordered groups computed for one query over one snapshot"""
    query: ReportQuery
    groups: Tuple[ReportGroup, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        return sum(group.count for group in self.groups)

    @property
    def event_ids(self) -> List[str]:
        return [event_id for group in self.groups for event_id in group.event_ids]


def day_bounds(
    start_date: Optional[date], end_date: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Convert an inclusive day range into half-open UTC datetime bounds.

    Returns (lower, upper) where lower <= occurs_at < upper; either side may
    be None when unbounded.
    """
    lower = datetime.combine(start_date, time.min, tzinfo=timezone.utc) if start_date else None
    upper = None
    # No day follows date.max; treat the range as open above
    if end_date is not None and end_date < date.max:
        upper = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return lower, upper


def matches_query(event: Event, query: ReportQuery) -> bool:
    """Whether an event passes the query's date range and location filters"""
    day = event.occurs_on
    if query.start_date is not None and day < query.start_date:
        return False
    if query.end_date is not None and day > query.end_date:
        return False
    if query.location is not None and event.location_key != query.location:
        return False
    return True


def group_key(event: Event, grouping: ReportGrouping) -> str:
    if grouping == ReportGrouping.DAY:
        return event.occurs_on.isoformat()
    if grouping == ReportGrouping.LOCATION:
        return event.location_key or NO_LOCATION_KEY
    return ALL_EVENTS_KEY


def aggregate(events: Iterable[StoredEvent], query: ReportQuery) -> ReportResult:
    """
    Filter, group and tally a snapshot of stored events.

    Identifiers within a group keep the order they had in the snapshot; groups
    are emitted in ascending key order (ISO day keys sort chronologically).
    When nothing matches, a single empty group is returned.

    Raises:
        QueryError: the query's start date is after its end date
    """
    ensure_valid_query(query)

    buckets: Dict[str, List[StoredEvent]] = {}
    for event in events:
        if not matches_query(event, query):
            continue
        buckets.setdefault(group_key(event, query.group_by), []).append(event)

    if not buckets:
        return ReportResult(query=query, groups=(ReportGroup(key=ALL_EVENTS_KEY, count=0, event_ids=()),))

    groups = tuple(
        _build_group(key, buckets[key]) for key in sorted(buckets)
    )
    return ReportResult(query=query, groups=groups)


def _build_group(key: str, members: Sequence[StoredEvent]) -> ReportGroup:
    return ReportGroup(
        key=key,
        count=len(members),
        event_ids=tuple(event.event_id for event in members),
        attendee_count=sum(len(event.attendees) for event in members),
    )


__all__ = [
    "ALL_EVENTS_KEY",
    "NO_LOCATION_KEY",
    "ReportGroup",
    "ReportResult",
    "day_bounds",
    "matches_query",
    "group_key",
    "aggregate",
]
