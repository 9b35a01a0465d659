"""Process-wide logging setup for the scheduler."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from backend.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def resolve_log_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its ``logging`` constant."""
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {level!r}")
    return resolved


def configure_logging(level: Optional[str] = None) -> None:
    """Send every module's records to stdout in one pipe-separated format.

    Runs once per process; ``level`` falls back to ``LOG_LEVEL``. Messages
    carry their fields as ``key=value`` pairs after the event name, e.g.
    ``Bed round completed | bed_id=1 | hosted=4 | remaining=1``.
    """
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    logging.basicConfig(
        level=resolve_log_level(level or get_settings().log_level),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
