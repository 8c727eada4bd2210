"""
Root conftest.py - Global configuration for all test layers.

Test Layers (Top-Down TDD):
    - api/        : HTTP contract tests (FastAPI TestClient, mocked store)
    - component/  : Component tests (mocked dependencies)
    - unit/       : Unit tests (pure functions, no I/O)
    - contracts/  : Data contracts and test data factories
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports of core.config
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("ENVIRONMENT", "testing")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "component: marks tests as component tests")
    config.addinivalue_line("markers", "api: marks tests as API tests")
    config.addinivalue_line("markers", "golden: safety net tests - DO NOT MODIFY")
    config.addinivalue_line("markers", "tdd: new feature tests")
