"""Logging setup for the flowtree package."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_root_logger = logging.getLogger("flowtree")

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure the package logger with a single stream handler.

    Args:
        level: Log level name (DEBUG, INFO, ...) or its numeric value.
        format: Custom log format string.
        stream: Output stream (defaults to stderr).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    handler.setLevel(level)
    _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. get_logger("ops")."""
    return _root_logger.getChild(name)
