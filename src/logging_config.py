"""Logging setup for the command line entry points.

The level comes from the explicit argument, else the LOG_LEVEL environment
variable, else INFO. DEBUG switches to a verbose format and lets SQLAlchemy
engine logs through.
"""

from __future__ import annotations

import logging
import os
import sys

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

FMT_VERBOSE = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
FMT_CONCISE = "%(levelname).1s %(name)s: %(message)s"


def resolve_level(level: str | None = None) -> int:
    level_str = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    return _LEVELS.get(level_str, logging.INFO)


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger with a single stderr handler."""
    numeric_level = resolve_level(level)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    is_debug = numeric_level <= logging.DEBUG
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt=FMT_VERBOSE if is_debug else FMT_CONCISE, datefmt="%H:%M:%S")
    )

    root.setLevel(numeric_level)
    root.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if is_debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["get_logger", "resolve_level", "setup_logging"]
