"""
Logging setup for the server shell.

Every component logs through a named child of the ``shellserve`` logger.
Lines are written to stderr with a date/time prefix, one record per line.
uvicorn's own warnings and errors go to the same stream.
"""

import logging
import sys

from .config import Settings

LOG_FORMAT = "%(asctime)s %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
ROOT_LOGGER = "shellserve"
SERVER_LOGGER = "uvicorn"


def _attach_handler(logger: logging.Logger) -> None:
    if any(getattr(h, "_shellserve", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._shellserve = True
    logger.addHandler(handler)


def setup_logging(settings: Settings) -> logging.Logger:
    """Attach one stderr handler each to the ``shellserve`` and ``uvicorn`` loggers. Idempotent."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.LOG_LEVEL.upper())
    _attach_handler(logger)
    _attach_handler(logging.getLogger(SERVER_LOGGER))
    return logger
