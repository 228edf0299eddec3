"""
NoteKeeper Backend: Cache Directory Server
==========================================

What:  A standalone static-file server for a cache directory.
How:   `GET /` answers with a fixed confirmation string; every other path is
       resolved against the cache directory by Starlette's StaticFiles,
       which returns 404 for missing files and refuses paths that escape the
       directory.
Who:   Started by `notekeeper cache -h HOST -p PORT -c DIR`.
"""

import logging
from pathlib import Path
from typing import Union

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from notekeeper import __version__
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger(__name__)

CONFIRMATION = "Server is running! Static files are served from the cache directory."


def create_cache_app(cache_dir: Union[str, Path]) -> FastAPI:
    """
    Build the cache server for an existing directory.

    Args:
        cache_dir: Directory served at the server root. Must already exist;
                   the CLI validates it through ServerOptions.
    """
    root = Path(cache_dir).resolve()

    app = FastAPI(
        title="NoteKeeper Cache Server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.cache_dir = root

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Registered before the mount so it wins over an index file at the root
    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return CONFIRMATION

    app.mount("/", StaticFiles(directory=str(root)), name="cache")

    logger.info("Cache directory: %s", root)
    return app
