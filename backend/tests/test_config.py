"""
NoteKeeper Backend: Configuration Tests
=======================================

What:  Settings validation and the startup-argument checks in ServerOptions.
"""

import pytest
from pydantic import ValidationError

from notekeeper.config import ServerOptions, Settings
from notekeeper.exceptions import StartupConfigError


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(log_level="chatty", _env_file=None)

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,", _env_file=None)
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_with_overrides_skips_none(self):
        settings = Settings(notes_file="one.json", _env_file=None)

        updated = settings.with_overrides(notes_file=None, atomic_writes=True)

        assert updated.notes_file == "one.json"
        assert updated.atomic_writes is True
        assert settings.atomic_writes is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NOTES_FILE", "/data/notes.json")
        monkeypatch.setenv("ATOMIC_WRITES", "true")

        settings = Settings(_env_file=None)

        assert settings.notes_file == "/data/notes.json"
        assert settings.atomic_writes is True


class TestServerOptions:

    def test_valid_options(self, tmp_path):
        options = ServerOptions.parse("127.0.0.1", "8080", str(tmp_path))

        assert options.host == "127.0.0.1"
        assert options.port == 8080
        assert options.cache_dir == tmp_path.resolve()

    @pytest.mark.parametrize("port", ["1", "65535"])
    def test_port_bounds_accepted(self, tmp_path, port):
        assert ServerOptions.parse("localhost", port, str(tmp_path)).port == int(port)

    @pytest.mark.parametrize("port", ["0", "65536", "-1", "http", "80.5"])
    def test_bad_port_rejected(self, tmp_path, port):
        with pytest.raises(StartupConfigError, match="--port must be a number between 1 and 65535"):
            ServerOptions.parse("localhost", port, str(tmp_path))

    def test_missing_directory_rejected(self, tmp_path):
        with pytest.raises(StartupConfigError, match="does not exist"):
            ServerOptions.parse("localhost", "8080", str(tmp_path / "absent"))

    def test_file_instead_of_directory_rejected(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(StartupConfigError, match="not a directory"):
            ServerOptions.parse("localhost", "8080", str(target))

    def test_blank_host_rejected(self, tmp_path):
        with pytest.raises(StartupConfigError, match="host must not be empty"):
            ServerOptions.parse("   ", "8080", str(tmp_path))

    def test_missing_parameters_listed(self):
        with pytest.raises(StartupConfigError) as excinfo:
            ServerOptions.parse(None, "", None)

        assert excinfo.value.context["missing"] == ["--host", "--port", "--cache"]
