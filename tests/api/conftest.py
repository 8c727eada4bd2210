"""
API Test Layer Configuration

Layer 1: HTTP contract tests
- FastAPI TestClient against the app with an in-memory store
- Client library tests over httpx.MockTransport

Usage:
    pytest tests/api -v
    pytest tests/api -v -k "report"
"""

import os
import sys

# Add project root
sys.path.insert(
    0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)
