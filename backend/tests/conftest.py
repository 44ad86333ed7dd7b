"""
Jotter Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── store: NoteStore over a private in-memory SQLite database
    ├── test_app: FastAPI app serving that store
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Override settings for testing BEFORE any jotter imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from jotter.main import create_app  # noqa: E402
from jotter.services.note_store import NoteStore  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def store():
    """
    Provides an initialized NoteStore backed by a fresh in-memory database.

    Each test gets its own engine, so no rows leak between tests.
    """
    note_store = NoteStore(MEMORY_URL)
    await note_store.initialize()
    yield note_store
    await note_store.dispose()


@pytest_asyncio.fixture
async def test_app(store):
    """FastAPI app wired to the test store (lifespan is not run by ASGITransport)."""
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
