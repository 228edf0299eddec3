"""
NoteKeeper Backend: Application Configuration
=============================================

What:  Centralized configuration using Pydantic Settings, plus validation of
       the command-line server options.
How:   `Settings` reads environment variables (or a .env file) and validates
       types/ranges. `ServerOptions` validates the host/port/cache triple the
       CLI receives and converts failures into StartupConfigError.
Who:   Imported by the app factories, the CLI and the tests.
When:  `settings` is loaded once at import; `ServerOptions` is built per CLI
       invocation before anything starts listening.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from notekeeper.exceptions import StartupConfigError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development. CLI flags override
    them through `with_overrides()`.
    """

    # ── Notes Storage ─────────────────────────────────────────────────────
    # What: Location of the persisted JSON array of {name, text} objects
    notes_file: str = Field(
        default="./notes.json",
        description="Path of the JSON document that mirrors the note store",
    )

    # What: Write the document through a temp file + rename instead of in place
    atomic_writes: bool = Field(default=False)

    # ── Cache Server ──────────────────────────────────────────────────────
    cache_dir: str = Field(
        default="./cache",
        description="Root directory served by the cache server",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=8000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def with_overrides(self, **overrides) -> "Settings":
        """
        Return a copy with the given fields replaced.

        `None` values are dropped so unset CLI flags keep the configured value.
        """
        update = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=update)


class ServerOptions(BaseModel):
    """
    Validated startup arguments shared by both servers.

    Rules:
        host:       non-empty after stripping whitespace
        port:       integer in 1-65535 (strings such as "8080" are accepted)
        cache_dir:  must exist and be a directory; stored resolved
    """

    host: str
    port: int = Field(ge=1, le=65535)
    cache_dir: Path

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("host must not be empty")
        return v.strip()

    @field_validator("cache_dir")
    @classmethod
    def validate_cache_dir(cls, v: Path) -> Path:
        if not v.exists() or not v.is_dir():
            raise ValueError(f"cache directory '{v}' does not exist or is not a directory")
        return v.resolve()

    @classmethod
    def parse(
        cls,
        host: Optional[str],
        port: Optional[str],
        cache_dir: Optional[str],
    ) -> "ServerOptions":
        """
        Build options from raw CLI values.

        Raises:
            StartupConfigError: with one line per failed field.
        """
        missing = [
            flag
            for flag, value in (("--host", host), ("--port", port), ("--cache", cache_dir))
            if value in (None, "")
        ]
        if missing:
            raise StartupConfigError(
                message=f"Missing required parameters: {', '.join(missing)}",
                context={"missing": missing},
            )

        try:
            return cls(host=host, port=port, cache_dir=cache_dir)
        except ValidationError as e:
            problems = []
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "options"
                if field == "port":
                    problems.append("--port must be a number between 1 and 65535")
                else:
                    problems.append(f"{field}: {error['msg']}")
            raise StartupConfigError(
                message="Invalid startup parameters:\n" + "\n".join(f"  - {p}" for p in problems),
                context={"errors": problems},
            ) from e


# Singleton instance; CLI invocations derive copies via with_overrides()
settings = Settings()
