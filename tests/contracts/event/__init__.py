"""
Event Service Contracts

Data Contract for event_service.
"""

from .data_contract import (
    # Response Contracts
    StoredEventContract,
    ReportGroupContract,
    ReportViewContract,
    # Factory
    EventTestDataFactory,
)

__all__ = [
    "StoredEventContract",
    "ReportGroupContract",
    "ReportViewContract",
    "EventTestDataFactory",
]
