"""
Notes API — Store Connector Unit Tests
========================================

What:  Tests for MongoConnector connect/bind/ping/close and the
       unavailable-handle behaviour.
How:   The motor client is replaced through `client_factory`; no server needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from notes_api.database import MongoConnector
from notes_api.exceptions import StoreUnavailableError


def _fake_client(ping_error=None):
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=ping_error)
    return client


class TestConnect:

    @pytest.mark.asyncio
    async def test_connect_success_binds_collection(self, test_settings):
        client = _fake_client()
        factory = MagicMock(return_value=client)
        connector = MongoConnector(test_settings, client_factory=factory)

        assert await connector.connect() is True

        factory.assert_called_once_with(
            "mongodb://localhost:27017",
            serverSelectionTimeoutMS=test_settings.mongo_timeout_ms,
        )
        client.admin.command.assert_awaited_once_with("ping")
        client.__getitem__.assert_called_once_with("tutor")
        client.__getitem__.return_value.__getitem__.assert_called_once_with("notes")
        assert connector.is_connected
        assert connector.collection is client["tutor"]["notes"]

    @pytest.mark.asyncio
    async def test_connect_failure_is_logged_and_client_closed(self, test_settings, caplog):
        client = _fake_client(ping_error=ServerSelectionTimeoutError("localhost:27017: refused"))
        connector = MongoConnector(test_settings, client_factory=MagicMock(return_value=client))

        assert await connector.connect() is False

        assert not connector.is_connected
        assert "Error connecting to MongoDB" in caplog.text
        client.close.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_connect_bad_url(self, test_settings):
        factory = MagicMock(side_effect=ConfigurationError("bad uri"))
        connector = MongoConnector(test_settings, client_factory=factory)

        assert await connector.connect() is False
        assert not connector.is_connected


class TestCollectionHandle:

    def test_unconnected_handle_raises(self, test_settings):
        connector = MongoConnector(test_settings)

        with pytest.raises(StoreUnavailableError) as exc_info:
            connector.collection
        assert exc_info.value.status_code == 503
        assert exc_info.value.context == {"database": "tutor", "collection": "notes"}

    def test_close_drops_handle(self, test_settings):
        client = _fake_client()
        connector = MongoConnector(test_settings)
        connector.bind(client)

        connector.close()

        client.close.assert_called_once_with()
        assert not connector.is_connected


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_without_client(self, test_settings):
        assert await MongoConnector(test_settings).ping() is False

    @pytest.mark.asyncio
    async def test_ping_ok(self, test_settings):
        connector = MongoConnector(test_settings)
        connector.bind(_fake_client())

        assert await connector.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, test_settings):
        connector = MongoConnector(test_settings)
        connector.bind(_fake_client(ping_error=ServerSelectionTimeoutError("down")))

        assert await connector.ping() is False
