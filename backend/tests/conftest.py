"""
NoteKeeper Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── notes_path: Location of the notes document inside tmp_path
    ├── store: A loaded NoteStore backed by notes_path
    ├── test_settings: Settings pointing at tmp_path
    ├── app: Notes app owning `store`
    ├── test_client: HTTPX AsyncClient for the notes app
    ├── cache_dir: A populated cache directory
    └── cache_client: HTTPX AsyncClient for the cache server
"""

import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Keep test runs out of any local .env and quiet in the console
os.environ["LOG_LEVEL"] = "WARNING"

from notekeeper.cache_server import create_cache_app  # noqa: E402
from notekeeper.config import Settings  # noqa: E402
from notekeeper.main import create_app  # noqa: E402
from notekeeper.services.note_store import JsonFilePersister, NoteStore  # noqa: E402


@pytest.fixture
def notes_path(tmp_path):
    """Path of the (not yet existing) notes document."""
    return tmp_path / "notes.json"


@pytest_asyncio.fixture
async def store(notes_path):
    """A loaded, empty NoteStore writing to notes_path."""
    note_store = NoteStore(JsonFilePersister(notes_path))
    await note_store.load()
    return note_store


@pytest.fixture
def test_settings(tmp_path, notes_path):
    return Settings(
        notes_file=str(notes_path),
        cache_dir=str(tmp_path),
        log_level="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(test_settings, store):
    return create_app(settings=test_settings, store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the notes app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def cache_dir(tmp_path):
    """A cache directory holding one text file and one nested file."""
    root = tmp_path / "cache"
    root.mkdir()
    (root / "hello.txt").write_text("hello from cache", encoding="utf-8")
    (root / "nested").mkdir()
    (root / "nested" / "data.json").write_text('{"ok": true}', encoding="utf-8")
    return root


@pytest_asyncio.fixture
async def cache_client(cache_dir):
    transport = ASGITransport(app=create_cache_app(cache_dir))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
