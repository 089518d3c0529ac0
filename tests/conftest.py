"""
PyTest configuration for the concept server.
Provides an isolated in-memory MongoDB per test, a controllable clock and
ready-made collection registries.

Version: 1.0
"""

# External imports
import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient
from datetime import datetime, timedelta
import os
import uuid

# Test mode must be set before the application settings are first read
os.environ["ENVIRONMENT"] = "test"
os.environ["TEST"] = "true"

# Internal imports
from concept_server.api.routes import Routes
from concept_server.config.settings import TEST_DB_NAME
from concept_server.framework.doc import CollectionRegistry

# Global test constants
CLOCK_START = datetime(2024, 1, 1, 12, 0, 0)


class FakeClock:
    """Deterministic clock; whole-second steps survive MongoDB's millisecond precision."""

    def __init__(self, start: datetime = CLOCK_START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 1) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


def get_empty_session() -> dict:
    """Stand-in for the web framework's session mapping."""
    return {}


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test"
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def database():
    """
    Provides an isolated mock MongoDB database.
    Each test gets its own database name so no state leaks between tests.
    """
    client = AsyncMongoMockClient()
    return client[f"{TEST_DB_NAME}-{uuid.uuid4().hex}"]


@pytest.fixture
def registry(database, clock) -> CollectionRegistry:
    return CollectionRegistry(database, clock=clock)


@pytest_asyncio.fixture
async def routes(database):
    """Routes with the default users ``alice`` and ``bob`` already registered."""
    routes = Routes(CollectionRegistry(database))
    await routes.setup()
    await routes.create_user(get_empty_session(), "alice", "alice123")
    await routes.create_user(get_empty_session(), "bob", "bob123")
    return routes
