"""
NoteKeeper Backend: Notes Route Handlers
========================================

What:  The CRUD surface over the NoteStore.
How:   Each handler calls one store operation and picks the status code.
       Store exceptions (NotFoundError, DuplicateNameError) propagate to the
       global handlers in main.py.

Routes:
    GET    /notes/{name}   → 200 text/plain note text        | 404
    PUT    /notes/{name}   → 200 JSON {name, text}           | 400, 404
    DELETE /notes/{name}   → 204 empty body                  | 404
    GET    /notes          → 200 JSON array of {name, text}
    POST   /write          → 201 JSON confirmation           | 400

Names may contain "/", so the per-note routes use a path converter.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import PlainTextResponse

from notekeeper.dependencies import get_note_store
from notekeeper.exceptions import ValidationError
from notekeeper.schemas.note import ErrorResponse, Note, WriteResponse
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[Note],
    summary="List all notes",
    description="Returns every note as {name, text}, in creation order.",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[Note]:
    return store.list()


@router.get(
    "/notes/{name:path}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Note text", "content": {"text/plain": {}}},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get the text of a note",
)
async def get_note(name: str, store: NoteStore = Depends(get_note_store)) -> PlainTextResponse:
    note = store.get(name)
    return PlainTextResponse(note.text)


@router.put(
    "/notes/{name:path}",
    response_model=Note,
    responses={
        200: {"description": "Updated note record", "model": Note},
        400: {"description": "Body is not UTF-8 text", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace the text of a note",
    description="The raw request body (text/plain) becomes the new note text.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"text/plain": {"schema": {"type": "string"}}},
        }
    },
)
async def update_note(
    name: str,
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValidationError(
            message="note body must be UTF-8 text",
            field="body",
            context={"position": e.start},
        ) from e
    return await store.update(name, text)


@router.delete(
    "/notes/{name:path}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Note deleted"},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(name: str, store: NoteStore = Depends(get_note_store)) -> Response:
    await store.delete(name)
    return Response(status_code=204)


@router.post(
    "/write",
    status_code=201,
    response_model=WriteResponse,
    responses={
        201: {"description": "Note created", "model": WriteResponse},
        400: {"description": "Missing field or duplicate name", "model": ErrorResponse},
    },
    summary="Create a note from the upload form",
    description=(
        "Form-encoded `note_name` and `note`, both required and non-empty. "
        "A missing field and an existing name both return the same 400 response."
    ),
)
async def write_note(
    note_name: Optional[str] = Form(default=None, description="Unique note name"),
    note: Optional[str] = Form(default=None, description="Note text"),
    store: NoteStore = Depends(get_note_store),
) -> WriteResponse:
    if not note_name:
        raise ValidationError(message="note_name is required", field="note_name")
    if not note:
        raise ValidationError(message="note is required", field="note")

    created = await store.create(note_name, note)
    return WriteResponse(note=created)
