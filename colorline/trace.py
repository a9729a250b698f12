from __future__ import annotations

import inspect
import xmlrpc.client
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from .logging import logger
from .values import Value, to_value

__all__ = [
    "StackFrame",
    "ErrorInfo",
    "FaultInfo",
    "MAX_CHAIN_DEPTH",
    "extract_error",
    "extract_frames",
    "iter_causes",
    "safe_str",
]

# Longest cause chain followed when extracting or rendering an error
MAX_CHAIN_DEPTH = 32


@dataclass(frozen=True)
class StackFrame:
    """One call in an error's history.

    A frame without ``file`` is internal code (builtins, frozen modules, code
    compiled from strings); its line is not meaningful then.
    """

    file: str | None = None
    line: int | None = None
    class_name: str | None = None
    call_type: str | None = None  # "->" instance call, "::" class call
    function: str | None = None
    args: tuple[Value, ...] = ()

    @classmethod
    def from_mapping(cls, frame: Mapping) -> StackFrame:
        """Build a frame from a trace dict with file/line/class/type/function/args.

        Raw argument objects are classified with :func:`to_value`.
        """
        args = frame.get("args")
        if not isinstance(args, (list, tuple)):
            args = ()
        return cls(
            file=frame.get("file"),
            line=frame.get("line"),
            class_name=frame.get("class"),
            call_type=frame.get("type"),
            function=frame.get("function"),
            args=tuple(to_value(a) for a in args),
        )


@dataclass
class ErrorInfo:
    """A raised failure and the failures that led to it.

    Attributes:
        type_name: Name of the concrete error type
        message: The error message
        code: Integer error code, 0 when the error has none
        file: Path where the error was raised, None for internal code
        line: Line number within file
        frames: Call stack, most recent call first
        cause: The failure this one wraps, if any
    """

    type_name: str
    message: str = ""
    code: int = 0
    file: str | None = None
    line: int | None = None
    frames: list[StackFrame] = field(default_factory=list)
    cause: ErrorInfo | None = field(default=None, repr=False)


@dataclass
class FaultInfo(ErrorInfo):
    """A fault reported by a remote peer (XML-RPC or SOAP)."""

    fault_code: str | int | None = None
    fault_actor: str | None = None
    fault_detail: str | None = None


def iter_causes(error: ErrorInfo, max_depth: int | None = None) -> Iterator[ErrorInfo]:
    """Yield the ancestors of error, nearest cause first.

    Stops at the end of the chain, on a cycle, or after max_depth ancestors.
    """
    if max_depth is None:
        max_depth = MAX_CHAIN_DEPTH
    seen = {id(error)}
    cause = error.cause
    while cause is not None and len(seen) <= max_depth:
        if id(cause) in seen:
            logger.debug("Cycle in error chain at %s", cause.type_name)
            return
        seen.add(id(cause))
        yield cause
        cause = cause.cause


def safe_str(value, what: str) -> str:
    """str(value), or a placeholder naming what failed to convert."""
    try:
        return str(value)
    except Exception:
        return f"<unprintable {what} {type(value).__name__}>"


def _is_internal(filename: str | None) -> bool:
    """Pseudo-files such as <string>, <stdin> or <frozen importlib._bootstrap>."""
    return not filename or (filename.startswith("<") and filename.endswith(">"))


def _error_code(e: BaseException) -> int:
    for attr in ("code", "errno"):
        code = getattr(e, attr, None)
        if isinstance(code, int) and not isinstance(code, bool):
            return code
    return 0


def _frame_call(frame) -> tuple[str | None, str | None, tuple[Value, ...]]:
    """Class name, call type and argument values of a live frame."""
    argnames, varargs, varkw, f_locals = inspect.getargvalues(frame)
    class_name = call_type = None
    if argnames and argnames[0] in ("self", "cls") and argnames[0] in f_locals:
        bound = f_locals[argnames[0]]
        argnames = argnames[1:]
        if isinstance(bound, type):
            class_name, call_type = bound.__qualname__, "::"
        else:
            class_name, call_type = type(bound).__qualname__, "->"
    values = [f_locals[name] for name in argnames if name in f_locals]
    if varargs and isinstance(f_locals.get(varargs), tuple):
        values.extend(f_locals[varargs])
    if varkw and f_locals.get(varkw):
        values.append(f_locals[varkw])
    return class_name, call_type, tuple(to_value(v) for v in values)


def extract_frames(tb) -> list[StackFrame]:
    """Stack frames of a traceback, most recent call first."""
    frames = []
    while tb is not None:
        frame = tb.tb_frame
        filename = frame.f_code.co_filename
        class_name, call_type, args = _frame_call(frame)
        internal = _is_internal(filename)
        frames.append(
            StackFrame(
                file=None if internal else filename,
                line=None if internal else tb.tb_lineno,
                class_name=class_name,
                call_type=call_type,
                function=frame.f_code.co_name,
                args=args,
            )
        )
        tb = tb.tb_next
    frames.reverse()
    return frames


def _fault_fields(e: BaseException) -> dict | None:
    """Extra fields for remote faults, None for ordinary exceptions."""
    if isinstance(e, xmlrpc.client.Fault):
        return {"fault_code": e.faultCode, "message": e.faultString}
    # SOAP client faults (e.g. zeep.exceptions.Fault) carry actor and detail
    if "Fault" in type(e).__name__ and (
        hasattr(e, "actor") or hasattr(e, "detail")
    ):
        detail = getattr(e, "detail", None)
        return {
            "fault_code": getattr(e, "code", None),
            "fault_actor": getattr(e, "actor", None),
            "fault_detail": None if detail is None else safe_str(detail, "detail"),
        }
    return None


def _extract_one(e: BaseException) -> ErrorInfo:
    tb = e.__traceback__
    try:
        frames = extract_frames(tb)
    except Exception:
        logger.exception("Error extracting traceback")
        frames = []
    # The innermost traceback entry is where the error was raised
    last = tb
    while last is not None and last.tb_next is not None:
        last = last.tb_next
    filename = last.tb_frame.f_code.co_filename if last else None
    internal = _is_internal(filename)
    info = {
        "type_name": type(e).__name__,
        "message": getattr(e, "message", "") or safe_str(e, "exception"),
        "code": _error_code(e),
        "file": None if internal else filename,
        "line": None if internal else last.tb_lineno,
        "frames": frames,
    }
    fault = _fault_fields(e)
    if fault is None:
        return ErrorInfo(**info)
    if not isinstance(fault.get("fault_code"), (int, str, type(None))):
        fault["fault_code"] = safe_str(fault["fault_code"], "fault code")
    info.update(fault)
    return FaultInfo(**info)


def _previous(e: BaseException) -> BaseException | None:
    return e.__cause__ or (None if e.__suppress_context__ else e.__context__)


def extract_error(exc: BaseException, *, max_depth: int | None = None) -> ErrorInfo:
    """Convert a live exception and the exceptions behind it into ErrorInfo.

    The cause of each entry is the explicit ``__cause__`` or else the
    implicit ``__context__`` (unless suppressed by ``raise ... from None``).
    """
    if max_depth is None:
        max_depth = MAX_CHAIN_DEPTH
    chain = []
    seen = set()
    e = exc
    while e is not None and id(e) not in seen and len(chain) <= max_depth:
        seen.add(id(e))
        chain.append(e)
        e = _previous(e)
    # Link from the oldest up so that each entry owns its cause
    cause = None
    for e in reversed(chain):
        info = _extract_one(e)
        info.cause = cause
        cause = info
    return cause
