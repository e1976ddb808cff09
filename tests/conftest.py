"""
Test configuration and fixtures for Chromapal tests.
"""
import pytest
from fastapi.testclient import TestClient

from chromapal.main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from chromapal.utils.metrics import reset_metrics
    reset_metrics()
