"""
NoteKeeper Backend: Notes Service Application Factory
=====================================================

What:  Creates and configures the FastAPI application for the notes service.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns exactly one NoteStore (app.state.note_store).
Who:   Called by the CLI (`notekeeper notes ...`), by uvicorn through the
       module-level `app`, and by the tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routes:                                             │
    │  ┌─────────────────┐ ┌────────────┐ ┌─────────────┐  │
    │  │ /notes, /write  │ │ / (form)   │ │ /health     │  │
    │  └─────────────────┘ └────────────┘ └─────────────┘  │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation→400 │ NotFound→404 │ Persistence→500     │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, then load the store unless the caller
               already did (the CLI loads it first so a malformed
               document stops the process before it listens)
    Shutdown:  nothing to release; every mutation is already on disk
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notekeeper import __version__
from notekeeper.config import Settings, settings as default_settings
from notekeeper.dependencies import build_note_store
from notekeeper.exceptions import (
    NoteKeeperError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from notekeeper.log import setup_logging
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.request_id import RequestIDMiddleware, current_request_id
from notekeeper.routes import health, notes, pages
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configure logging from the app settings, then load the note store if it
    has not been loaded yet.

    A PersistenceError raised here aborts uvicorn's startup.
    """
    setup_logging(app.state.settings.log_level)
    store: NoteStore = app.state.note_store
    logger.info("NoteKeeper notes service starting up...")

    if not store.loaded:
        await store.load()

    logger.info("Notes document: %s (%d notes)", store.persister.path.resolve(), len(store))

    yield

    logger.info("NoteKeeper notes service shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": current_request_id(),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and error bodies.

        ValidationError / DuplicateNameError → 400 (one generic body for both)
        NotFoundError                        → 404
        PersistenceError                     → 500
        NoteKeeperError (base)               → 500
        Exception (fallback)                 → 500

    Internal details (paths, OS errors) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning(
            "[%s] Bad request: %s | Context: %s",
            current_request_id(),
            exc.message,
            exc.context,
        )
        return _error(400, "bad_request", "Bad Request")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error(
            "[%s] Persistence error: %s | Context: %s",
            current_request_id(),
            exc.message,
            exc.context,
        )
        return _error(500, "server_error", "The note could not be saved. Please try again later.")

    @app.exception_handler(NoteKeeperError)
    async def handle_app_error(request: Request, exc: NoteKeeperError):
        logger.error("[%s] Application error: %s", current_request_id(), exc.message)
        return _error(500, "server_error", "An internal error occurred.")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            current_request_id(),
            str(exc),
            exc_info=True,
        )
        return _error(500, "internal_server_error", "An unexpected error occurred.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[NoteStore] = None,
) -> FastAPI:
    """
    Create and configure the notes service.

    Args:
        settings: Configuration; defaults to the environment-derived singleton.
        store:    A ready NoteStore (loaded or not). When omitted, one is
                  built from `settings.notes_file` and loaded at startup.

    Returns:
        FastAPI instance with routes, middleware and error handlers.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="NoteKeeper API",
        description=(
            "Named text notes kept in a single JSON document. "
            "Create notes through the upload form or POST /write, "
            "then read, replace and delete them under /notes/{name}."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.note_store = store if store is not None else build_note_store(settings)

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    return app


# uvicorn notekeeper.main:app
app = create_app()
