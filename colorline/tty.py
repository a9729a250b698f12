"""Colored terminal output for the standard :mod:`logging` module.

Usage:
    import colorline
    colorline.load()  # Root logger writes colored lines to stderr
    colorline.load("myapp", include_stacktraces=True, stack_limit=10)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, TextIO

from .formatter import ColoredLineFormatter, LogRecord
from .levels import Level

__all__ = ["ColoredFormatter", "load", "unload", "to_log_record"]

# Attributes every logging.LogRecord has; anything else came in via extra=
_reserved = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}

# (logger, handler) pairs added by load(), removed by unload()
_installed: list[tuple[logging.Logger, logging.Handler]] = []


def to_log_record(record: logging.LogRecord) -> LogRecord:
    """Convert a stdlib log record, passing extra= attributes as context."""
    exc = record.exc_info[1] if record.exc_info else None
    return LogRecord(
        level=Level.from_stdlib(record.levelno),
        message=record.getMessage(),
        datetime=datetime.fromtimestamp(record.created).astimezone(),
        channel=record.name,
        context={k: v for k, v in vars(record).items() if k not in _reserved},
        error=exc,
    )


class ColoredFormatter(logging.Formatter):
    """A logging.Formatter producing one colored line per record.

    Args:
        line_formatter: Formatter to render with. If None, one is created
            from the keyword arguments (see ColoredLineFormatter).
    """

    def __init__(
        self, line_formatter: ColoredLineFormatter | None = None, **kwargs: Any
    ):
        super().__init__()
        self.line_formatter = line_formatter or ColoredLineFormatter(**kwargs)

    def format(self, record: logging.LogRecord) -> str:
        # The handler writes its own terminator
        return self.line_formatter.format(to_log_record(record)).removesuffix("\n")


def load(
    logger: logging.Logger | str | None = None,
    stream: TextIO | None = None,
    **kwargs: Any,
) -> logging.Handler:
    """Attach a colored StreamHandler to a logger (the root logger by default).

    Args:
        logger: Logger or logger name. None means the root logger.
        stream: Output stream. Defaults to sys.stderr.
        **kwargs: Passed to ColoredLineFormatter.

    Returns:
        The handler that was added. Call unload() to remove it.
    """
    if not isinstance(logger, logging.Logger):
        logger = logging.getLogger(logger)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter(**kwargs))
    logger.addHandler(handler)
    _installed.append((logger, handler))
    return handler


def unload() -> None:
    """Remove all handlers added by load()."""
    while _installed:
        logger, handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()
