#!/usr/bin/env python3
"""Service configuration for the event service

Network identity of the HTTP surface and the base URL peers use to reach it.
"""
import os
from dataclasses import dataclass

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Event service endpoint settings"""

    service_name: str = "event_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8230

    # Version tag stamped on every report view
    report_version: str = "v1"

    # Used by EventServiceClient when no base_url is passed
    event_service_url: str = "http://localhost:8230"

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        port = _int(os.getenv("EVENT_SERVICE_PORT", "8230"), 8230)
        return cls(
            service_name=os.getenv("SERVICE_NAME", "event_service"),
            service_host=os.getenv("EVENT_SERVICE_HOST", "0.0.0.0"),
            service_port=port,
            report_version=os.getenv("REPORT_VERSION", "v1"),
            event_service_url=os.getenv("EVENT_SERVICE_URL", f"http://localhost:{port}"),
        )
