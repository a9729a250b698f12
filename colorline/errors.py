from __future__ import annotations

__all__ = ["ColorlineError", "ConfigurationError", "InvalidLevel"]


class ColorlineError(Exception):
    """Base class for errors raised by colorline."""


class ConfigurationError(ColorlineError, TypeError):
    """A formatter or color scheme was configured with something unusable.

    Raised when the formatter is set up, never while rendering a line.
    """


class InvalidLevel(ColorlineError, ValueError):
    """A severity level that is not part of :class:`colorline.levels.Level`."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Unknown log level: {level!r}")
