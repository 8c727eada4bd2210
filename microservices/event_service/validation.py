"""
Event Validator

Turns untyped candidate input into a normalized Event, and raw report
parameters into a ReportQuery. Side-effect free.
"""

from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .models import Event, ReportQuery
from .protocols import EventValidationError, QueryError


def _describe(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into {field, message} pairs"""
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        message = err.get("msg", "invalid value")
        # Strip pydantic's "Value error, " prefix from custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": field, "message": message})
    return details


def _summary(details: List[Dict[str, Any]]) -> str:
    return "; ".join(f"{d['field']}: {d['message']}" for d in details)


def validate(candidate: Union[Mapping[str, Any], BaseModel]) -> Event:
    """
    Validate and normalize a candidate event.

    Accepts a mapping, an Event, or any pydantic model carrying the event
    fields (e.g. EventCreateRequest). Unknown fields are rejected.

    Raises:
        EventValidationError: title missing/blank, occurs_at missing or
            unparsable, wrong field types, or unknown fields
    """
    if isinstance(candidate, Event):
        return candidate

    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(exclude_unset=True)
    elif not isinstance(candidate, Mapping):
        raise EventValidationError(
            "event must be an object",
            [{"field": "__root__", "message": f"expected an object, got {type(candidate).__name__}"}],
        )

    try:
        return Event.model_validate(dict(candidate))
    except PydanticValidationError as e:
        details = _describe(e)
        raise EventValidationError(_summary(details), details) from e


def ensure_valid_query(query: ReportQuery) -> ReportQuery:
    """Reject a query whose start date is after its end date"""
    if query.has_inverted_range:
        raise QueryError(
            f"start_date {query.start_date.isoformat()} is after end_date {query.end_date.isoformat()}"
        )
    return query


def parse_report_query(raw: Union[Mapping[str, Any], ReportQuery, None]) -> ReportQuery:
    """
    Build a ReportQuery from raw parameters.

    None-valued parameters are treated as absent.

    Raises:
        QueryError: unparsable dates, unknown grouping, unknown fields, or an
            inverted date range
    """
    if raw is None:
        return ReportQuery()
    if isinstance(raw, ReportQuery):
        return ensure_valid_query(raw)

    params = {key: value for key, value in raw.items() if value is not None}
    try:
        query = ReportQuery.model_validate(params)
    except PydanticValidationError as e:
        raise QueryError(_summary(_describe(e))) from e
    return ensure_valid_query(query)


__all__ = ["validate", "ensure_valid_query", "parse_report_query"]
