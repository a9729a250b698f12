from __future__ import annotations

import logging
from enum import IntEnum

from .errors import InvalidLevel

__all__ = ["Level"]


class Level(IntEnum):
    """Ordered severity levels (RFC 5424 names)."""

    DEBUG = 100
    INFO = 200
    NOTICE = 250
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550
    EMERGENCY = 600

    @classmethod
    def coerce(cls, value) -> Level:
        """Accept a Level, its integer value or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidLevel(value) from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidLevel(value) from None
        raise InvalidLevel(value)

    @classmethod
    def from_stdlib(cls, levelno: int) -> Level:
        """Map a :mod:`logging` level number to the nearest level at or below it."""
        for stdlib, level in _STDLIB_LEVELS:
            if levelno >= stdlib:
                return level
        return cls.DEBUG


# Highest first, scanned by Level.from_stdlib
_STDLIB_LEVELS = (
    (logging.CRITICAL, Level.CRITICAL),
    (logging.ERROR, Level.ERROR),
    (logging.WARNING, Level.WARNING),
    (logging.INFO, Level.INFO),
)
