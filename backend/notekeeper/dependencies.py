"""
NoteKeeper Backend: Store Construction and Injection
====================================================

What:  Builds the NoteStore from settings and hands it to route handlers.
How:   The application factory places one store on `app.state.note_store`;
       `get_note_store` is the FastAPI dependency that retrieves it for each
       request. Nothing is kept at module level, so every app (and every
       test) owns its own store.

Example usage in a route:
    @router.get("/notes")
    async def list_notes(store: NoteStore = Depends(get_note_store)):
        return store.list()
"""

from fastapi import Request

from notekeeper.config import Settings
from notekeeper.services.note_store import NoteStore, build_persister


def build_note_store(settings: Settings) -> NoteStore:
    """Create an unloaded store backed by `settings.notes_file`."""
    persister = build_persister(settings.notes_file, atomic=settings.atomic_writes)
    return NoteStore(persister)


def get_note_store(request: Request) -> NoteStore:
    """FastAPI dependency returning the store owned by the running app."""
    return request.app.state.note_store
