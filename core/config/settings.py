#!/usr/bin/env python3
"""Event service main configuration

Combines the infrastructure, logging and service sub-configs.
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .service_config import ServiceConfig


@dataclass
class EventServiceSettings:
    """Top-level settings for the event service"""
    environment: str = "development"
    debug: bool = False

    infra: InfraConfig = field(default_factory=InfraConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        return self.environment in ("testing", "test")

    @classmethod
    def from_env(cls) -> 'EventServiceSettings':
        """Load all settings from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            environment=env,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            infra=InfraConfig.from_env(),
            logging=LoggingConfig.from_env(),
            service=ServiceConfig.from_env(),
        )
