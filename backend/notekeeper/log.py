"""
NoteKeeper Backend: Logging Configuration
=========================================

What:  One place that configures the root logger for both servers.
When:  Called by the CLI before a server starts, and by the notes app
       lifespan when it is launched directly with uvicorn.

Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger to write to stdout.

    Noisy third-party loggers are lowered to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
