"""
Notes API — Documentation Publisher
=====================================

What:  Builds the OpenAPI 3 document and serves it through Swagger UI.
How:   The document is derived from the metadata each route declares in its
       decorator (summary, description, parameters, request body model,
       responses) plus the static API information below. It is generated
       once, cached on the app, and never consults the store.

Endpoints:
    GET /api-docs       interactive Swagger UI
    GET /openapi.json   the raw OpenAPI document
"""

from typing import Any, Dict

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from notes_api import __version__
from notes_api.config import Settings

API_TITLE = "Notes API"
API_DESCRIPTION = "A simple API to manage notes"
DOCS_URL = "/api-docs"
OPENAPI_URL = "/openapi.json"


def build_openapi_schema(app: FastAPI, settings: Settings) -> Dict[str, Any]:
    """Generate the OpenAPI document from the app's registered routes."""
    return get_openapi(
        title=API_TITLE,
        version=__version__,
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=app.openapi_tags,
        servers=[{"url": settings.public_url, "description": "Development server"}],
    )


def configure_docs(app: FastAPI, settings: Settings) -> None:
    """
    Install the cached OpenAPI generator on `app`.

    The app must be created with `docs_url=DOCS_URL` and
    `openapi_url=OPENAPI_URL`; FastAPI's own Swagger UI route then serves
    whatever `app.openapi()` returns.
    """

    def openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi_schema(app, settings)
        return app.openapi_schema

    app.openapi = openapi
