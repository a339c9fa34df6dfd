"""
Pytest configuration and fixtures.
"""
import os

# Keep test runs from writing log files; must be set before app settings load
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.access_service import AccessService
from app.utils.access import AccessScope


@pytest.fixture(scope="function")
def client():
    """Create a test client for the API."""
    yield TestClient(app)


@pytest.fixture
def service():
    """Provide an access service."""
    return AccessService()


@pytest.fixture
def group_scope():
    """Scope of a group server access."""
    return AccessScope(group="grp")


@pytest.fixture
def guest_scope():
    """Scope of a group guest access."""
    return AccessScope(group="grp", account="alice")
