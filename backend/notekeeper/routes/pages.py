"""
NoteKeeper Backend: Upload Form Pages
=====================================

What:  Serves the HTML form used to create notes from a browser.
How:   `GET /` redirects to the form; the form itself is a static file
       bundled in notekeeper/static and posts to POST /write.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, RedirectResponse

from notekeeper.exceptions import NotFoundError

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"
UPLOAD_FORM = "UploadForm.html"

router = APIRouter(tags=["Pages"], include_in_schema=False)


@router.get("/")
async def index() -> RedirectResponse:
    return RedirectResponse(url=f"/{UPLOAD_FORM}", status_code=302)


@router.get(f"/{UPLOAD_FORM}")
async def upload_form() -> FileResponse:
    path = STATIC_DIR / UPLOAD_FORM
    if not path.exists():
        raise NotFoundError(resource="page", resource_id=UPLOAD_FORM)
    return FileResponse(path=str(path), media_type="text/html")
