"""
NoteKeeper Backend: Health Check Route
======================================

What:  Health check endpoint for monitoring and container health checks.
How:   Reports how many notes are held in memory and whether the directory
       of the notes document can still be written.

Status levels:
    - healthy:   notes document location is writable
    - degraded:  the next mutation would fail with PersistenceError
"""

import logging
import os
import time

from fastapi import APIRouter, Depends

from notekeeper import __version__
from notekeeper.dependencies import get_note_store
from notekeeper.schemas.note import HealthResponse
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> HealthResponse:
    directory = store.persister.path.resolve().parent
    storage = "writable"
    overall = "healthy"

    if not directory.is_dir() or not os.access(directory, os.W_OK):
        storage = "unavailable"
        overall = "degraded"
        logger.warning("Health check: notes directory %s is not writable", directory)

    return HealthResponse(
        status=overall,
        version=__version__,
        notes=len(store),
        storage=storage,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
