#!/usr/bin/env python3
"""Modular configuration system for the event service

Configuration hierarchy:
- infra_config: Document store (PostgreSQL) connection and collection names
- service_config: HTTP surface identity and peer base URL
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .service_config import ServiceConfig
from .settings import EventServiceSettings

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = EventServiceSettings.from_env()

def get_settings() -> EventServiceSettings:
    """Get global settings instance"""
    return settings

def reload_settings() -> EventServiceSettings:
    """Reload settings from environment"""
    global settings
    settings = EventServiceSettings.from_env()
    return settings

__all__ = [
    'EventServiceSettings',
    'get_settings',
    'reload_settings',
    'settings',
    'LoggingConfig',
    'InfraConfig',
    'ServiceConfig',
]
