"""
Notes API — Application, Docs and Health Tests
================================================

What:  Tests for the documentation publisher, the health endpoint,
       configuration parsing and the lifespan startup path.
"""

from unittest.mock import AsyncMock, MagicMock

import pydantic
import pytest
from httpx import ASGITransport, AsyncClient

from notes_api.config import Settings
from notes_api.database import MongoConnector
from notes_api.main import create_app, lifespan


class TestDocumentation:

    @pytest.mark.asyncio
    async def test_swagger_ui_served(self, test_client):
        response = await test_client.get("/api-docs")

        assert response.status_code == 200
        assert "swagger-ui" in response.text
        assert "/openapi.json" in response.text

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/openapi.json")

        assert response.status_code == 200
        spec = response.json()
        assert spec["info"]["title"] == "Notes API"
        assert spec["info"]["version"] == "1.0.0"
        assert spec["info"]["description"] == "A simple API to manage notes"
        assert spec["servers"] == [
            {"url": "http://localhost:3000", "description": "Development server"}
        ]
        assert set(spec["paths"]["/notes"]) == {"get", "post"}
        assert set(spec["paths"]["/notes/{note_id}"]) == {"put", "delete"}
        assert spec["paths"]["/notes"]["get"]["summary"] == "Retrieve all notes"
        assert spec["paths"]["/notes/{note_id}"]["put"]["responses"]["404"]["description"] == "Note not found"
        assert "title" in spec["components"]["schemas"]["Note"]["properties"]

    def test_document_is_built_once(self, test_settings, store):
        app = create_app(config=test_settings, store=store)

        assert app.openapi() is app.openapi()

    @pytest.mark.asyncio
    async def test_docs_do_not_need_the_store(self, unavailable_client):
        response = await unavailable_client.get("/openapi.json")

        assert response.status_code == 200


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_disconnected(self, unavailable_client):
        response = await unavailable_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
        assert body["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_health_connected(self, test_settings):
        store = MongoConnector(test_settings)
        store.ping = AsyncMock(return_value=True)
        transport = ASGITransport(app=create_app(config=test_settings, store=store))

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_connects_and_shutdown_closes(self, test_settings):
        client = MagicMock()
        client.admin.command = AsyncMock()
        store = MongoConnector(test_settings, client_factory=MagicMock(return_value=client))
        app = create_app(config=test_settings, store=store)

        async with lifespan(app):
            assert store.is_connected
            assert app.openapi_schema is not None

        client.close.assert_called_once_with()
        assert not store.is_connected

    @pytest.mark.asyncio
    async def test_startup_survives_connection_failure(self, test_settings):
        store = MongoConnector(test_settings)
        store.connect = AsyncMock(return_value=False)
        app = create_app(config=test_settings, store=store)

        async with lifespan(app):
            store.connect.assert_awaited_once()
            assert not store.is_connected


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("MONGO_URL", "MONGO_DATABASE", "MONGO_COLLECTION", "BACKEND_PORT", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        config = Settings(_env_file=None)

        assert config.mongo_url == "mongodb://localhost:27017"
        assert config.mongo_database == "tutor"
        assert config.mongo_collection == "notes"
        assert config.backend_port == 3000
        assert config.public_url == "http://localhost:3000"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MONGO_DATABASE", "other")
        monkeypatch.setenv("BACKEND_PORT", "8080")

        config = Settings(_env_file=None)

        assert config.mongo_database == "other"
        assert config.backend_port == 8080

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        config = Settings(cors_origins="http://a.test, http://b.test")

        assert config.cors_origins_list == ["http://a.test", "http://b.test"]
