"""Plain-text rendering of errors, their stack traces and their causes.

Output follows the familiar one-line-per-frame layout::

    [object] (ValueError(code: 0): bad input at /app/main.py:12)
    [stacktrace]
    #0 /app/main.py:12 Parser->parse('x = 1')
    #1 /app/main.py:30 main()

Every function here is total over well-formed input: missing optional
fields render as empty text and malformed frames are skipped, so that
rendering an error never prevents the log line itself from being written.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .errors import ConfigurationError
from .logging import logger
from .trace import ErrorInfo, FaultInfo, StackFrame, extract_error, iter_causes
from .values import render_argument

__all__ = [
    "RenderConfig",
    "render_frame",
    "render_trace",
    "render_exception",
]


@dataclass(frozen=True)
class RenderConfig:
    """Rendering options shared by a formatter.

    Attributes:
        stack_limit: Maximum frames rendered per trace, None or 0 for all
        include_stacktraces: Whether errors are followed by their stack trace
    """

    stack_limit: int | None = None
    include_stacktraces: bool = False

    def __post_init__(self):
        limit = self.stack_limit
        if limit is not None and (
            not isinstance(limit, int) or isinstance(limit, bool) or limit < 0
        ):
            raise ConfigurationError(
                f"stack_limit must be a non-negative integer, got {limit!r}"
            )


def render_frame(frame: StackFrame, index: int) -> str:
    """One trace line, e.g. ``#0 /app/x.py:3 Foo->bar(1, 'a')`` plus newline."""
    out = f"#{index} "
    if not frame.file:
        out += "[internal function] "
    elif not isinstance(frame.file, str):
        out += "[unknown function] "
    else:
        line = "" if frame.line is None else frame.line
        out += f"{frame.file}:{line} "
    out += f"{frame.class_name or ''}{frame.call_type or ''}{frame.function or ''}("
    out += ", ".join(render_argument(a) for a in frame.args or ())
    return out + ")\n"


def _as_frame(item) -> StackFrame | None:
    if isinstance(item, StackFrame):
        return item
    if isinstance(item, Mapping):
        try:
            return StackFrame.from_mapping(item)
        except TypeError:
            return None
    return None


def render_trace(frames: Iterable, limit: int | None = None) -> str:
    """Render frames one per line, at most limit of them if limit is positive.

    Items that are not frames (or frame dicts) are skipped. Frame numbers
    are positions in the given sequence.
    """
    out = []
    for index, item in enumerate(frames or ()):
        if limit is not None and limit > 0 and len(out) >= limit:
            break
        frame = _as_frame(item)
        if frame is None:
            logger.debug("Skipping malformed stack frame #%d: %r", index, item)
            continue
        out.append(render_frame(frame, index))
    return "".join(out).rstrip("\n")


def _location(error: ErrorInfo) -> str:
    if not error.file:
        return "[internal function]"
    line = "" if error.line is None else error.line
    return f"{error.file}:{line}"


def _summary(error: ErrorInfo) -> str:
    """Type, code, message and location of an error in the chain."""
    return (
        f"{error.type_name}(code: {error.code or 0}): "
        f"{error.message} at {_location(error)}"
    )


def _fault_suffix(error: FaultInfo) -> str:
    out = ""
    if error.fault_code is not None:
        out += f" faultcode: {error.fault_code}"
    if error.fault_actor is not None:
        out += f" faultactor: {error.fault_actor}"
    if error.fault_detail is not None:
        out += f" detail: {error.fault_detail}"
    return out


def render_exception(
    error: ErrorInfo | BaseException,
    include_trace: bool = False,
    stack_limit: int | None = None,
) -> str:
    """Render an error, optionally its stack trace, and a summary of its causes.

    Args:
        error: The error to render. Live exceptions are extracted first.
        include_trace: Append the error's own stack trace.
        stack_limit: Maximum number of frames in the trace, None or 0 for all.

    Returns:
        The error block followed by ``, Type(code: N): message at file:line``
        for each cause, nearest first. Causes never include a trace.
    """
    if isinstance(error, BaseException):
        error = extract_error(error)
    out = f"[object] ({error.type_name}(code: {error.code or 0}"
    if isinstance(error, FaultInfo):
        out += _fault_suffix(error)
    out += f"): {error.message} at {_location(error)})"
    if include_trace:
        out += f"\n[stacktrace]\n{render_trace(error.frames, stack_limit)}\n"
    for cause in iter_causes(error):
        out += f", {_summary(cause)}"
    return out
