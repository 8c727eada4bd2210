#!/usr/bin/env python3
"""
Core Module for the Event Service

Shared infrastructure components used by the microservices in this repository.

COMPONENTS:
    - config/: Dataclass-based configuration loaded from the environment
    - logger.py: Service logger setup
    - postgres_client.py: asyncpg pool wrapper used as the document store handle

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger
    from core.postgres_client import create_postgres_client

    settings = get_settings()
    logger = setup_service_logger("event_service")
    db = create_postgres_client("event_service", config=settings.infra)
"""

__version__ = "1.0.0"
