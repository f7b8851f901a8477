"""
Notes API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires configuration, the MongoDB store connector,
       middleware, exception handlers, routes and API documentation.
Who:   uvicorn (`uvicorn notes_api.main:app`) or the `notes-api` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌───────────────┐ ┌───────────┐ │
    │  │ GET/POST      │ │ PUT/DELETE    │ │ GET       │ │
    │  │ /notes        │ │ /notes/{id}   │ │ /health   │ │
    │  └───────────────┘ └───────────────┘ └───────────┘ │
    │  Docs: GET /api-docs, GET /openapi.json             │
    │                                                     │
    │  Exception Handlers (plain-text bodies):            │
    │  Validation→400 │ NotFound→404 │ DB→500 │ Store→503 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → connect MongoDB (failure logged, not fatal)
              → build OpenAPI document
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from notes_api import __version__
from notes_api.config import Settings, settings as default_settings
from notes_api.database import MongoConnector
from notes_api.docs import API_DESCRIPTION, API_TITLE, DOCS_URL, OPENAPI_URL, configure_docs
from notes_api.exceptions import (
    DatabaseError,
    NotesApiError,
    NotFoundError,
    StoreUnavailableError,
    UNEXPECTED_ERROR_MESSAGE,
    ValidationError,
)
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Connect the store; a failure is logged and the server still starts,
           answering 503 on data routes
        3. Build the OpenAPI document once
    Shutdown:
        1. Close the MongoDB client
    """
    config: Settings = app.state.settings
    store: MongoConnector = app.state.store

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("Notes API %s starting up...", __version__)

    if not store.is_connected:
        await store.connect()

    app.openapi()
    logger.info("Server is running on %s", config.public_url)
    logger.info("API docs: %s%s", config.public_url, DOCS_URL)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes API shutting down...")
    store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to plain-text responses.

    Handler hierarchy:
        ValidationError        → 400 (malformed note id)
        NotFoundError          → 404 "Note not found."
        DatabaseError          → 500 per-operation message
        StoreUnavailableError  → 503
        NotesApiError (base)   → exc.status_code
        Exception (fallback)   → 500, only for errors raised by middleware;
                                 RequestLoggingMiddleware answers route errors

    Only client-safe messages reach the response; context is logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        rid = request_id_var.get("")
        logger.warning("[%s] Store unavailable: %s", rid, exc.context)
        return PlainTextResponse(exc.message, status_code=503)

    @app.exception_handler(NotesApiError)
    async def handle_app_error(request: Request, exc: NotesApiError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(UNEXPECTED_ERROR_MESSAGE, status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    store: Optional[MongoConnector] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use; defaults to the module-level singleton
        store:  Store connector; defaults to a MongoConnector for `config`.
                Tests pass one already bound to an in-memory client.
    """
    config = config or default_settings
    store = store or MongoConnector(config)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url=DOCS_URL,
        redoc_url=None,
        openapi_url=OPENAPI_URL,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store

    # ── Middleware ────────────────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    configure_docs(app, config)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    uvicorn.run(
        "notes_api.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
