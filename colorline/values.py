"""Call argument values and their short display form in stack traces.

Arguments are classified once into one of the :data:`Value` cases by
:func:`to_value` and then rendered by :func:`render_argument`, which has one
branch per case and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

__all__ = [
    "Value",
    "BoolValue",
    "IntValue",
    "FloatValue",
    "TextValue",
    "ObjectValue",
    "NullValue",
    "ArrayValue",
    "ResourceValue",
    "UnknownValue",
    "to_value",
    "render_argument",
    "TEXT_CUTOFF",
]

# Longest text excerpt shown for a string argument
TEXT_CUTOFF = 15


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class IntValue:
    value: int


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class ObjectValue:
    type_name: str


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class ArrayValue:
    pass


@dataclass(frozen=True)
class ResourceValue:
    """An open handle such as a file or socket."""

    closed: bool = False


@dataclass(frozen=True)
class UnknownValue:
    type_name: str = ""


Value = Union[
    BoolValue,
    IntValue,
    FloatValue,
    TextValue,
    ObjectValue,
    NullValue,
    ArrayValue,
    ResourceValue,
    UnknownValue,
]

_collection_types = (list, tuple, dict, set, frozenset)
_binary_types = (bytes, bytearray, memoryview)


def _is_resource(obj: Any) -> bool:
    """File-like objects: anything with fileno() and a closed flag."""
    try:
        return callable(getattr(obj, "fileno", None)) and isinstance(
            obj.closed, bool
        )
    except Exception:
        return False


def to_value(obj: Any) -> Value:
    """Classify an arbitrary Python object for argument rendering."""
    # bool is a subclass of int and must be checked first
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, int):
        return IntValue(obj)
    if isinstance(obj, float):
        return FloatValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if obj is None:
        return NullValue()
    if isinstance(obj, _collection_types):
        return ArrayValue()
    if isinstance(obj, _binary_types):
        return UnknownValue(type(obj).__name__)
    if _is_resource(obj):
        return ResourceValue(closed=obj.closed)
    return ObjectValue(type(obj).__qualname__)


def render_argument(value: Value) -> str:
    """Short display string for one call argument."""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, FloatValue):
        return f"{value.value:.2f}"
    if isinstance(value, TextValue):
        text = value.value
        excerpt = f"'{text[:TEXT_CUTOFF]}'"
        return excerpt + "..." if len(text) > TEXT_CUTOFF else excerpt
    if isinstance(value, ObjectValue):
        return f"Object({value.type_name})"
    if isinstance(value, ArrayValue):
        return "array"
    if isinstance(value, ResourceValue):
        return "resource (closed)" if value.closed else "resource"
    if isinstance(value, NullValue):
        return "NULL"
    return "unknown type"
