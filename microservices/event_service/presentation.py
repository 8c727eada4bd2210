"""
Report Presentation Adapter

Maps the aggregation engine's internal result onto the versioned ReportView
returned to admin callers.
"""

from .aggregation import ReportResult
from .models import ReportGroupView, ReportView

REPORT_VERSION = "v1"


def present(result: ReportResult, version: str = REPORT_VERSION) -> ReportView:
    """Shape a ReportResult into the stable external structure"""
    return ReportView(
        version=version,
        group_by=result.query.group_by,
        total_count=result.total_count,
        groups=[
            ReportGroupView(
                key=group.key,
                count=group.count,
                event_ids=list(group.event_ids),
                attendee_count=group.attendee_count,
            )
            for group in result.groups
        ],
    )


__all__ = ["REPORT_VERSION", "present"]
