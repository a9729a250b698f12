"""Color schemes mapping severity levels to ANSI escape sequences.

A color scheme is anything with ``colorize(level)`` and ``reset()``. The
formatter only relies on that pair, so host applications may pass their own
objects without inheriting from anything here. :class:`AnsiScheme` is the
stock implementation, built from a mapping of every level to an escape
sequence.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from .errors import ConfigurationError, InvalidLevel
from .levels import Level

__all__ = [
    "ColorScheme",
    "AnsiScheme",
    "DEFAULT_COLORS",
    "TRAFFIC_LIGHT_COLORS",
    "default_scheme",
    "traffic_light_scheme",
    "check_scheme",
    "sgr",
]

# ANSI escape codes for terminal colors (can be monkeypatched for styling)
ESC = "\x1b["
RESET = f"{ESC}0m"

# SGR parameters
BOLD = 1
UNDERLINE = 4
BLINK = 5
FG_RED = 31
FG_GREEN = 32
FG_YELLOW = 33
FG_CYAN = 36
FG_WHITE = 37
BG_RED_BRIGHT = 101


def sgr(*codes: int) -> str:
    """Build a Select Graphic Rendition escape sequence, e.g. sgr(31, 4)."""
    return f"{ESC}{';'.join(str(c) for c in codes)}m"


DEFAULT_COLORS: dict[Level, str] = {
    Level.DEBUG: sgr(FG_WHITE),
    Level.INFO: sgr(FG_GREEN),
    Level.NOTICE: sgr(FG_CYAN),
    Level.WARNING: sgr(FG_YELLOW),
    Level.ERROR: sgr(FG_RED),
    Level.CRITICAL: sgr(FG_RED, UNDERLINE),
    Level.ALERT: sgr(FG_WHITE, BG_RED_BRIGHT),
    Level.EMERGENCY: sgr(BG_RED_BRIGHT, BLINK, FG_WHITE),
}

TRAFFIC_LIGHT_COLORS: dict[Level, str] = {
    Level.DEBUG: sgr(FG_WHITE),
    Level.INFO: sgr(FG_GREEN),
    Level.NOTICE: sgr(FG_GREEN),
    Level.WARNING: sgr(FG_YELLOW),
    Level.ERROR: sgr(FG_RED),
    Level.CRITICAL: sgr(FG_RED),
    Level.ALERT: sgr(FG_RED, BOLD),
    Level.EMERGENCY: sgr(FG_RED, BOLD, BLINK),
}


@runtime_checkable
class ColorScheme(Protocol):
    def colorize(self, level: Level | int | str) -> str: ...

    def reset(self) -> str: ...


class AnsiScheme:
    """Color scheme backed by a level -> escape sequence mapping.

    Args:
        colors: Escape sequence for each Level. Every level must be present
            and map to a non-empty string.
        reset: Sequence that restores the terminal's default rendition.

    Raises:
        ConfigurationError: If a level is missing or has an empty sequence.
    """

    def __init__(self, colors: Mapping[Level, str], reset: str = RESET):
        missing = [lvl.name for lvl in Level if not colors.get(lvl)]
        if missing:
            raise ConfigurationError(
                f"Color scheme has no color for: {', '.join(missing)}"
            )
        if not reset:
            raise ConfigurationError("Color scheme needs a reset sequence")
        self._colors = {lvl: colors[lvl] for lvl in Level}
        self._reset = reset

    def colorize(self, level: Level | int | str) -> str:
        """Start sequence for a level; raises InvalidLevel for unknown levels."""
        try:
            return self._colors[Level.coerce(level)]
        except KeyError:  # pragma: no cover (every Level is validated above)
            raise InvalidLevel(level) from None

    def reset(self) -> str:
        return self._reset

    def __repr__(self):
        return f"{type(self).__name__}({len(self._colors)} levels)"


def default_scheme() -> AnsiScheme:
    """A new scheme with the default palette."""
    return AnsiScheme(DEFAULT_COLORS)


def traffic_light_scheme() -> AnsiScheme:
    """A new scheme with green/yellow/red colors only."""
    return AnsiScheme(TRAFFIC_LIGHT_COLORS)


def check_scheme(scheme) -> ColorScheme:
    """Return scheme if it can serve as a color scheme, else raise ConfigurationError."""
    for name in ("colorize", "reset"):
        if not callable(getattr(scheme, name, None)):
            raise ConfigurationError(
                f"{type(scheme).__name__} is not a color scheme: missing {name}()"
            )
    return scheme
