"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── golden/      🔒 Characterization (never modify)
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/golden -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import MockPostgresClient
from tests.component.golden.event_service.mocks import MockEventStore


# =============================================================================
# Shared Mocks
# =============================================================================

@pytest.fixture
def mock_db() -> MockPostgresClient:
    """Mock PostgreSQL client"""
    return MockPostgresClient()


@pytest.fixture
def mock_event_store() -> MockEventStore:
    """In-memory event store"""
    return MockEventStore()
