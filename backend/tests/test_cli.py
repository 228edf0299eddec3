"""
NoteKeeper Backend: CLI Tests
=============================

What:  Startup validation and wiring of the `cache` and `notes` commands.
How:   click's CliRunner; uvicorn.run is patched so nothing listens.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from notekeeper.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_uvicorn():
    with patch("notekeeper.cli.uvicorn.run") as run, \
         patch("notekeeper.cli.setup_logging"):
        yield run


class TestCacheCommand:

    def test_starts_server_with_valid_options(self, runner, mock_uvicorn, cache_dir):
        result = runner.invoke(cli, ["cache", "-h", "127.0.0.1", "-p", "8080", "-c", str(cache_dir)])

        assert result.exit_code == 0, result.output
        app = mock_uvicorn.call_args.args[0]
        assert app.state.cache_dir == cache_dir.resolve()
        assert mock_uvicorn.call_args.kwargs["host"] == "127.0.0.1"
        assert mock_uvicorn.call_args.kwargs["port"] == 8080

    def test_long_option_names(self, runner, mock_uvicorn, cache_dir):
        result = runner.invoke(
            cli, ["cache", "--host", "0.0.0.0", "--port", "9000", "--cache", str(cache_dir)]
        )

        assert result.exit_code == 0, result.output
        assert mock_uvicorn.call_args.kwargs["port"] == 9000

    @pytest.mark.parametrize("port", ["0", "70000", "abc"])
    def test_bad_port_exits_1(self, runner, mock_uvicorn, cache_dir, port):
        result = runner.invoke(cli, ["cache", "-h", "localhost", "-p", port, "-c", str(cache_dir)])

        assert result.exit_code == 1
        assert "--port must be a number between 1 and 65535" in result.output
        mock_uvicorn.assert_not_called()

    def test_missing_cache_dir_exits_1(self, runner, mock_uvicorn, tmp_path):
        result = runner.invoke(
            cli, ["cache", "-h", "localhost", "-p", "8080", "-c", str(tmp_path / "nope")]
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output
        mock_uvicorn.assert_not_called()

    def test_missing_options_exits_1(self, runner, mock_uvicorn):
        result = runner.invoke(cli, ["cache", "-p", "8080"])

        assert result.exit_code == 1
        assert "--host" in result.output and "--cache" in result.output
        mock_uvicorn.assert_not_called()


class TestNotesCommand:

    def test_loads_store_from_cache_dir(self, runner, mock_uvicorn, cache_dir):
        (cache_dir / "notes.json").write_text(
            json.dumps([{"name": "a", "text": "hello"}]), encoding="utf-8"
        )

        result = runner.invoke(cli, ["notes", "-h", "127.0.0.1", "-p", "8000", "-c", str(cache_dir)])

        assert result.exit_code == 0, result.output
        app = mock_uvicorn.call_args.args[0]
        store = app.state.note_store
        assert store.loaded is True
        assert store.get("a").text == "hello"
        assert app.state.settings.notes_file == str(cache_dir.resolve() / "notes.json")

    def test_notes_file_and_atomic_flags(self, runner, mock_uvicorn, cache_dir, tmp_path):
        notes_file = tmp_path / "elsewhere.json"

        result = runner.invoke(
            cli,
            [
                "notes", "-h", "127.0.0.1", "-p", "8000", "-c", str(cache_dir),
                "--notes-file", str(notes_file), "--atomic",
            ],
        )

        assert result.exit_code == 0, result.output
        app = mock_uvicorn.call_args.args[0]
        assert app.state.settings.atomic_writes is True
        assert app.state.note_store.persister.path == notes_file
        assert len(app.state.note_store) == 0

    def test_malformed_document_exits_1(self, runner, mock_uvicorn, cache_dir):
        (cache_dir / "notes.json").write_text("[{broken", encoding="utf-8")

        result = runner.invoke(cli, ["notes", "-h", "127.0.0.1", "-p", "8000", "-c", str(cache_dir)])

        assert result.exit_code == 1
        assert "malformed" in result.output
        mock_uvicorn.assert_not_called()

    def test_bad_port_exits_1(self, runner, mock_uvicorn, cache_dir):
        result = runner.invoke(cli, ["notes", "-h", "127.0.0.1", "-p", "0", "-c", str(cache_dir)])

        assert result.exit_code == 1
        mock_uvicorn.assert_not_called()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "notekeeper" in result.output
