"""TRACE and SUCCESS on top of the stdlib levels."""
from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    SUCCESS = 25
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# levels the stdlib does not name
EXTRA_LEVELS = (LogLevel.TRACE, LogLevel.SUCCESS)


def register_levels() -> None:
    for level in EXTRA_LEVELS:
        logging.addLevelName(int(level), level.name)


def to_level(value: int | str) -> int:
    """Level from ``LOG_LEVEL``-style input: a name, a number, or a numeric string.

    Unknown names fall back to INFO so a typo never silences the crawl.
    """
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    return int(LogLevel.__members__.get(text.upper(), LogLevel.INFO))
