"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_to_int(level: str | int | None, default: int = logging.INFO) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        lvl = getattr(logging, level.upper(), None)
        if isinstance(lvl, int):
            return lvl
    return default


def configure_logging(level: str | int | None = None) -> None:
    """Send records to stderr at ``level``; kafka-python is kept at WARNING."""
    logging.basicConfig(level=_level_to_int(level), format=LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger("kafka").setLevel(logging.WARNING)
