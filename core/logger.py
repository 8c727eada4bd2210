"""
Service Logger Setup

Configures stdlib logging for a microservice from LoggingConfig.

Usage:
    from core.logger import setup_service_logger

    logger = setup_service_logger("event_service")
    logger.info("Service started")
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure the root handlers once and return the service logger.

    Args:
        service_name: Logger name, also used for the service identity
        config: Logging config (defaults to LoggingConfig.from_env())

    Returns:
        Logger for the service
    """
    if config is None:
        config = LoggingConfig.from_env()

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(config.log_format)

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid stacking handlers when the app module is reloaded
    if not getattr(root, "_event_service_configured", False):
        if config.enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            root.addHandler(console)

        if config.log_file:
            file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        root._event_service_configured = True

    logger = logging.getLogger(service_name)
    logger.setLevel(level)
    logger.debug(f"Logger configured for {service_name} ({config.environment})")
    return logger
