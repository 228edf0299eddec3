"""
NoteKeeper Backend: Note Store
==============================

What:  The authoritative in-memory collection of notes and its load/save
       boundary to a JSON document on disk.
How:   `NoteStore` keeps an ordered list of `Note` records and delegates
       durable storage to a persister supplied at construction time.
Who:   Owned by the FastAPI application (app.state.note_store) and handed to
       route handlers through `get_note_store`; loaded by the CLI before the
       server starts listening.

Persisted Document:
    [
        {"name": "groceries", "text": "milk, eggs"},
        {"name": "todo", "text": "call the plumber"}
    ]

Mutation Flow:
    create/update/delete
        → acquire the writer lock
        → compute the next snapshot (list copy)
        → persister.write(snapshot)      (full overwrite)
        → publish snapshot in memory
        → release lock, request completes

    A failed write leaves the in-memory state untouched, so memory and disk
    agree after every request. The lock serializes writers within one
    process; several processes sharing one document are not coordinated.

Persisters:
    JsonFilePersister        truncate-and-write in place. A crash mid-write
                             can leave a corrupt document.
    AtomicJsonFilePersister  write a sibling temp file, then os.replace().
"""

import asyncio
import json
import logging
import os
import uuid
from pathlib import Path
from typing import List, Optional, Protocol, Union

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from notekeeper.exceptions import DuplicateNameError, NotFoundError, PersistenceError
from notekeeper.schemas.note import Note, NoteDocument

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Persisters
# ══════════════════════════════════════════════════════════════════════════


class Persister(Protocol):
    """Capability the store uses to read and overwrite its document."""

    path: Path

    async def read(self) -> Optional[str]:
        ...

    async def write(self, snapshot: List[Note]) -> None:
        ...


def serialize(snapshot: List[Note]) -> str:
    """Render a snapshot as the persisted JSON array."""
    return json.dumps(
        [note.model_dump() for note in snapshot],
        indent=2,
        ensure_ascii=False,
    )


class JsonFilePersister:
    """
    Overwrites the whole document in place on every write.

    Limitation:
        There is no partial-write protection: no temp file, no backup. If the
        process dies while writing, the document may be truncated and the
        next `load()` fails with PersistenceError. Use
        AtomicJsonFilePersister when that matters.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                return await f.read()
        except OSError as e:
            raise PersistenceError(
                message="Could not read the notes document",
                context={"path": str(self.path), "os_error": str(e)},
            ) from e

    async def write(self, snapshot: List[Note]) -> None:
        payload = serialize(snapshot)
        try:
            async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
                await f.write(payload)
        except OSError as e:
            raise PersistenceError(
                message="Could not write the notes document",
                context={"path": str(self.path), "os_error": str(e)},
            ) from e


class AtomicJsonFilePersister(JsonFilePersister):
    """
    Writes to `<name>.<random>.tmp` next to the document, then renames it
    over the target with os.replace(). Readers see either the old or the new
    document, never a partial one.
    """

    async def write(self, snapshot: List[Note]) -> None:
        payload = serialize(snapshot)
        tmp_path = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
                await f.flush()
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(
                message="Could not write the notes document",
                context={"path": str(self.path), "os_error": str(e)},
            ) from e


def build_persister(path: Union[str, Path], atomic: bool = False) -> JsonFilePersister:
    """Pick the persister matching the `atomic_writes` setting."""
    if atomic:
        return AtomicJsonFilePersister(path)
    return JsonFilePersister(path)


# ══════════════════════════════════════════════════════════════════════════
# Store
# ══════════════════════════════════════════════════════════════════════════


class NoteStore:
    """
    Ordered collection of notes with unique names.

    Operations:
        load()                 read the persisted document (startup)
        save()                 overwrite the document with the current state
        find(name)             Note or None
        get(name)              Note, or NotFoundError
        create(name, text)     DuplicateNameError if taken
        update(name, text)     NotFoundError if absent
        delete(name)           NotFoundError if absent
        list()                 all notes, insertion order
    """

    def __init__(self, persister: Persister):
        self.persister = persister
        self._notes: List[Note] = []
        self._lock = asyncio.Lock()
        self.loaded = False

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, name: object) -> bool:
        return self._index_of(name) is not None

    # ── Load / Save ───────────────────────────────────────────────────────

    async def load(self) -> None:
        """
        Replace the in-memory state with the persisted document.

        A missing document means an empty store. A document that exists but
        is not a JSON array of {name, text} strings with unique names raises
        PersistenceError; nothing is recovered.
        """
        raw = await self.persister.read()
        if raw is None:
            self._notes = []
            self.loaded = True
            logger.info("No notes document at %s; starting empty", self.persister.path)
            return

        try:
            notes = NoteDocument.validate_json(raw)
        except PydanticValidationError as e:
            raise PersistenceError(
                message=f"Notes document {self.persister.path} is malformed",
                context={"path": str(self.persister.path), "errors": e.error_count()},
            ) from e

        seen = set()
        for note in notes:
            if note.name in seen:
                raise PersistenceError(
                    message=(
                        f"Notes document {self.persister.path} contains "
                        f"duplicate name '{note.name}'"
                    ),
                    context={"path": str(self.persister.path), "name": note.name},
                )
            seen.add(note.name)

        self._notes = notes
        self.loaded = True
        logger.info("Loaded %d notes from %s", len(notes), self.persister.path)

    async def save(self) -> None:
        """Overwrite the persisted document with the current state."""
        async with self._lock:
            await self.persister.write(list(self._notes))

    async def _commit(self, snapshot: List[Note]) -> None:
        # Caller holds the lock.
        await self.persister.write(snapshot)
        self._notes = snapshot

    # ── Queries ───────────────────────────────────────────────────────────

    def _index_of(self, name: object) -> Optional[int]:
        for index, note in enumerate(self._notes):
            if note.name == name:
                return index
        return None

    def find(self, name: str) -> Optional[Note]:
        index = self._index_of(name)
        return None if index is None else self._notes[index]

    def get(self, name: str) -> Note:
        note = self.find(name)
        if note is None:
            raise NotFoundError(resource="note", resource_id=name)
        return note

    def list(self) -> List[Note]:
        return list(self._notes)

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, name: str, text: str) -> Note:
        async with self._lock:
            if self._index_of(name) is not None:
                raise DuplicateNameError(name)
            note = Note(name=name, text=text)
            await self._commit(self._notes + [note])
        logger.info("Created note '%s' (%d chars)", name, len(text))
        return note

    async def update(self, name: str, text: str) -> Note:
        async with self._lock:
            index = self._index_of(name)
            if index is None:
                raise NotFoundError(resource="note", resource_id=name)
            note = self._notes[index].model_copy(update={"text": text})
            snapshot = list(self._notes)
            snapshot[index] = note
            await self._commit(snapshot)
        logger.info("Updated note '%s' (%d chars)", name, len(text))
        return note

    async def delete(self, name: str) -> None:
        async with self._lock:
            index = self._index_of(name)
            if index is None:
                raise NotFoundError(resource="note", resource_id=name)
            snapshot = self._notes[:index] + self._notes[index + 1:]
            await self._commit(snapshot)
        logger.info("Deleted note '%s'", name)
