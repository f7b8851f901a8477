"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_collection:    AsyncMock standing in for a motor collection
    ├── mongo_client:       mongomock-motor in-memory client
    ├── store:              MongoConnector bound to mongo_client
    ├── notes_collection:   the bound "notes" collection, for direct inspection
    ├── test_client:        HTTPX AsyncClient against an app using `store`
    └── unavailable_client: HTTPX AsyncClient against an app whose store
                            never connected
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "tutor"
os.environ["MONGO_COLLECTION"] = "notes"
os.environ["BACKEND_PORT"] = "3000"
os.environ["LOG_LEVEL"] = "WARNING"

from notes_api.config import Settings  # noqa: E402
from notes_api.database import MongoConnector  # noqa: E402
from notes_api.main import create_app  # noqa: E402


@pytest.fixture
def test_settings():
    return Settings()


@pytest.fixture
def mock_collection():
    """
    Provides a mock motor collection.

    Usage:
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        await NoteService(mock_collection).update_note(oid, {"title": "x"})
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.insert_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.update_one = AsyncMock()
    return collection


@pytest.fixture
def mongo_client():
    return AsyncMongoMockClient()


@pytest.fixture
def store(test_settings, mongo_client):
    connector = MongoConnector(test_settings)
    connector.bind(mongo_client)
    return connector


@pytest.fixture
def notes_collection(store):
    return store.collection


async def _client_for(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client(test_settings, store):
    """
    HTTPX AsyncClient talking to an app backed by the in-memory store.

    ASGITransport does not run the lifespan, so the pre-bound connector is
    used as-is and no real MongoDB is contacted.
    """
    app = create_app(config=test_settings, store=store)
    async for client in _client_for(app):
        yield client


@pytest_asyncio.fixture
async def unavailable_client(test_settings):
    app = create_app(config=test_settings, store=MongoConnector(test_settings))
    async for client in _client_for(app):
        yield client


@pytest.fixture
def sample_note():
    return {"title": "Groceries", "content": "Milk, eggs"}
