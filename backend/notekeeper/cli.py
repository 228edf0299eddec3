"""
CLI for the NoteKeeper servers.

Usage:
    notekeeper cache -h 127.0.0.1 -p 8080 -c ./cache
    notekeeper notes -h 127.0.0.1 -p 8000 -c ./cache [--notes-file PATH] [--atomic]

Both commands validate host, port (1-65535) and the cache directory before
anything listens; a bad value prints a diagnostic to stderr and exits 1.
"""

import asyncio
import logging
import sys
from typing import Optional

import click
import uvicorn

from notekeeper import __version__
from notekeeper.config import ServerOptions, settings as default_settings
from notekeeper.exceptions import PersistenceError, StartupConfigError
from notekeeper.log import setup_logging

logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def server_options(func):
    """Attach the -h/-p/-c options shared by both commands."""
    func = click.option("--cache", "-c", "cache", help="Path to cache directory (required)")(func)
    func = click.option("--port", "-p", "port", help="Port number, 1 to 65535 (required)")(func)
    func = click.option("--host", "-h", "host", help="Host address, e.g. 127.0.0.1 (required)")(func)
    return func


def parse_options(host: Optional[str], port: Optional[str], cache: Optional[str]) -> ServerOptions:
    try:
        return ServerOptions.parse(host, port, cache)
    except StartupConfigError as e:
        fail(e.message)


@click.group()
@click.version_option(version=__version__, prog_name="notekeeper")
def cli():
    """
    NoteKeeper - named text notes and a static cache server.

    \b
    Commands:
      cache   Serve static files from a cache directory
      notes   Run the notes CRUD API with its upload form and /docs
    """


@cli.command()
@server_options
def cache(host: Optional[str], port: Optional[str], cache: Optional[str]):
    """Serve static files from the cache directory."""
    options = parse_options(host, port, cache)
    setup_logging(default_settings.log_level)

    from notekeeper.cache_server import create_cache_app

    app = create_cache_app(options.cache_dir)
    logger.info("Server started at http://%s:%d", options.host, options.port)
    logger.info("Cache directory: %s", options.cache_dir)
    uvicorn.run(app, host=options.host, port=options.port, log_config=None)


@cli.command()
@server_options
@click.option(
    "--notes-file",
    "notes_file",
    type=click.Path(dir_okay=False),
    help="JSON document holding the notes (default: <cache>/notes.json)",
)
@click.option("--atomic", is_flag=True, help="Write the document via temp file + rename")
def notes(
    host: Optional[str],
    port: Optional[str],
    cache: Optional[str],
    notes_file: Optional[str],
    atomic: bool,
):
    """Run the notes API."""
    options = parse_options(host, port, cache)
    settings = default_settings.with_overrides(
        backend_host=options.host,
        backend_port=options.port,
        cache_dir=str(options.cache_dir),
        notes_file=notes_file or str(options.cache_dir / "notes.json"),
        atomic_writes=atomic or None,
    )
    setup_logging(settings.log_level)

    from notekeeper.dependencies import build_note_store
    from notekeeper.main import create_app

    store = build_note_store(settings)
    try:
        asyncio.run(store.load())
    except PersistenceError as e:
        fail(e.message)

    app = create_app(settings=settings, store=store)
    logger.info("Server started at http://%s:%d", options.host, options.port)
    logger.info("API docs: http://%s:%d/docs", options.host, options.port)
    uvicorn.run(app, host=options.host, port=options.port, log_config=None)


def main():
    cli()


if __name__ == "__main__":
    main()
