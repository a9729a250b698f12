from .colors import AnsiScheme, ColorScheme, default_scheme, traffic_light_scheme
from .errors import ColorlineError, ConfigurationError, InvalidLevel
from .formatter import ColoredLineFormatter, LineFormatter, LogRecord
from .levels import Level
from .render import RenderConfig, render_exception, render_frame, render_trace
from .trace import ErrorInfo, FaultInfo, StackFrame, extract_error
from .tty import ColoredFormatter, load, unload
from .values import render_argument, to_value

__all__ = [
    "load",
    "unload",
    "ColoredFormatter",
    "ColoredLineFormatter",
    "LineFormatter",
    "LogRecord",
    "Level",
    "ColorScheme",
    "AnsiScheme",
    "default_scheme",
    "traffic_light_scheme",
    "RenderConfig",
    "render_exception",
    "render_frame",
    "render_trace",
    "render_argument",
    "to_value",
    "ErrorInfo",
    "FaultInfo",
    "StackFrame",
    "extract_error",
    "ColorlineError",
    "ConfigurationError",
    "InvalidLevel",
]
