"""Logger setup shared by the profilegen CLI and service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "profilegen"
CONSOLE_FORMAT = "[profilegen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``profilegen`` or one of its children, e.g. ``profilegen.fetcher``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``profilegen`` logger.

    The console follows ``verbose``. A log file always records DEBUG, including
    the worker thread name, so a quiet run can still be diagnosed afterwards.
    Calling this again replaces and closes the previous handlers.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(console_level))
    if log_file is None:
        logger.setLevel(console_level)
        return logger

    path = Path(log_file).expanduser()
    logger.addHandler(_file_handler(path))
    logger.setLevel(logging.DEBUG)
    logger.debug("Writing debug log to %s", path)
    return logger


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


__all__ = ["configure_logging", "get_logger"]
