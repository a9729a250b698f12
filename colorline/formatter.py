from __future__ import annotations

import dataclasses
import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .colors import ColorScheme, check_scheme, default_scheme
from .levels import Level
from .render import RenderConfig, render_exception
from .trace import ErrorInfo, safe_str

__all__ = ["LogRecord", "LineFormatter", "ColoredLineFormatter"]

SIMPLE_FORMAT = "[%datetime%] %channel%.%level_name%: %message% %context% %extra% %error%\n"
SIMPLE_DATE = "%Y-%m-%dT%H:%M:%S.%f%z"

# Nesting depth at which context values are no longer expanded
MAX_NORMALIZE_DEPTH = 9

# %name% or %context.key% / %extra.key%
placeholder = re.compile(r"%(\w+)(?:\.([^%]+))?%")


def _now():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LogRecord:
    """A log entry as handed over by the logging core."""

    level: Level
    message: str
    datetime: datetime = field(default_factory=_now)
    channel: str = "app"
    context: Mapping[str, Any] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)
    error: ErrorInfo | BaseException | None = None

    def __post_init__(self):
        object.__setattr__(self, "level", Level.coerce(self.level))


class LineFormatter:
    """Renders a LogRecord into a line of text from a ``%placeholder%`` format.

    Args:
        fmt: Format with placeholders %datetime%, %channel%, %level_name%,
            %level%, %message%, %context%, %extra%, %error%, and
            %context.<key>% / %extra.<key>% for single values.
        datefmt: strftime format for timestamps.
        allow_inline_line_breaks: Keep newlines inside values instead of
            replacing them by spaces.
        ignore_empty_context_and_extra: Render empty context/extra as nothing
            rather than ``[]``.
        include_stacktraces: Follow errors by their stack trace. Implies
            allow_inline_line_breaks.
        stack_limit: Maximum frames per stack trace, None or 0 for all.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        allow_inline_line_breaks: bool = False,
        ignore_empty_context_and_extra: bool = False,
        include_stacktraces: bool = False,
        stack_limit: int | None = None,
    ):
        self.fmt = fmt or SIMPLE_FORMAT
        self.datefmt = datefmt or SIMPLE_DATE
        self.allow_inline_line_breaks = allow_inline_line_breaks or include_stacktraces
        self.ignore_empty_context_and_extra = ignore_empty_context_and_extra
        self._config = RenderConfig(
            stack_limit=stack_limit, include_stacktraces=include_stacktraces
        )

    @property
    def config(self) -> RenderConfig:
        return self._config

    def include_stacktraces(self, enabled: bool = True) -> None:
        self._config = dataclasses.replace(self._config, include_stacktraces=enabled)
        if enabled:
            self.allow_inline_line_breaks = True

    def set_stack_limit(self, limit: int | None) -> None:
        self._config = dataclasses.replace(self._config, stack_limit=limit)

    def format(self, record: LogRecord) -> str:
        return self.render_body(record)

    def render_body(self, record: LogRecord) -> str:
        """Substitute the record's fields into the format."""
        fmt = self.fmt
        # Keys used by %context.key% / %extra.key% are left out of the full dumps
        used: dict[str, set[str]] = {"context": set(), "extra": set()}
        for m in placeholder.finditer(fmt):
            if m[2] is not None and m[1] in used:
                used[m[1]].add(m[2])
        rest = {
            name: {k: v for k, v in getattr(record, name).items() if k not in keys}
            for name, keys in used.items()
        }
        if self.ignore_empty_context_and_extra:
            for name, values in rest.items():
                if not values:
                    fmt = fmt.replace(f"%{name}% ", "").replace(f"%{name}%", "")
        if record.error is None:
            fmt = fmt.replace("%error% ", "")

        fields = {
            "datetime": record.datetime,
            "channel": record.channel,
            "level_name": record.level.name,
            "level": int(record.level),
            "message": record.message,
            "context": rest["context"],
            "extra": rest["extra"],
            "error": record.error,
        }

        def substitute(m: re.Match) -> str:
            name, key = m[1], m[2]
            if key is None:
                if name not in fields:
                    return m[0]
                if name in used:
                    return self.stringify(fields[name]) if fields[name] else "[]"
                return "" if fields[name] is None else self.stringify(fields[name])
            if name not in used:
                return m[0]
            values = getattr(record, name)
            return self.stringify(values[key]) if key in values else ""

        return placeholder.sub(substitute, fmt)

    def stringify(self, value: Any) -> str:
        return self.replace_newlines(self.convert_to_string(value))

    def convert_to_string(self, value: Any) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        if isinstance(value, (ErrorInfo, BaseException)):
            return self.format_exception(value)
        if isinstance(value, datetime):
            return value.strftime(self.datefmt)
        return json.dumps(
            self.normalize(value), ensure_ascii=False, separators=(",", ":")
        )

    def format_exception(self, error: ErrorInfo | BaseException) -> str:
        return render_exception(
            error,
            include_trace=self._config.include_stacktraces,
            stack_limit=self._config.stack_limit,
        )

    def normalize(self, value: Any, depth: int = 0) -> Any:
        """Reduce a value to JSON types, rendering errors and dates as text."""
        if depth > MAX_NORMALIZE_DEPTH:
            return f"Over {MAX_NORMALIZE_DEPTH} levels deep, aborting normalization"
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        if isinstance(value, (ErrorInfo, BaseException)):
            return self.format_exception(value)
        if isinstance(value, datetime):
            return value.strftime(self.datefmt)
        if isinstance(value, Mapping):
            return {str(k): self.normalize(v, depth + 1) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.normalize(v, depth + 1) for v in value]
        name = type(value).__qualname__
        if type(value).__str__ is object.__str__:
            return f"[object] ({name})"
        return f"[object] ({name}: {safe_str(value, 'object')})"

    def replace_newlines(self, text: str) -> str:
        if self.allow_inline_line_breaks:
            # JSON escapes newlines, put them back
            if text.startswith(("{", "[")):
                return text.replace("\\r", "\r").replace("\\n", "\n")
            return text
        return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


class ColoredLineFormatter(LineFormatter):
    """LineFormatter that wraps each line in the color of its level.

    Args:
        color_scheme: Object with colorize(level) and reset(); a fresh
            default scheme is used when None.

    Other arguments are those of LineFormatter.

    Raises:
        ConfigurationError: If color_scheme is not a usable color scheme.
    """

    def __init__(self, color_scheme: ColorScheme | None = None, *args, **kwargs):
        self.set_color_scheme(color_scheme)
        super().__init__(*args, **kwargs)

    @property
    def color_scheme(self) -> ColorScheme:
        return self._color_scheme

    def set_color_scheme(self, color_scheme: ColorScheme | None) -> None:
        if color_scheme is None:
            color_scheme = default_scheme()
        self._color_scheme = check_scheme(color_scheme)

    def format(self, record: LogRecord) -> str:
        scheme = self._color_scheme
        body = self.render_body(record).strip()
        return f"{scheme.colorize(record.level)}{body}{scheme.reset()}\n"

    def format_batch(self, records: Iterable[LogRecord]) -> str:
        return "".join(self.format(r) for r in records)
