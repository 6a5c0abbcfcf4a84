"""Logging setup shared by the server and the headless runner."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"

# Per-request access lines drown out game events at 10 Hz polling.
_NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    """Route every ``conquest.*`` logger to stdout at *level*.

    Unknown level names fall back to INFO. Third-party access logs are
    held at WARNING unless DEBUG is requested.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level if numeric_level <= logging.DEBUG else logging.WARNING)
