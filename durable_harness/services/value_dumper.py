"""Readable structural dumps of arbitrary values for diagnostic output.

Updates:
    v0.1.0 - 2026-10-19 - Shape-based rendering with an identity-stack cycle guard.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
from pathlib import PurePath
from typing import Any
from uuid import UUID

CYCLE_MARKER = "<cyclic reference>"
NONE_PLACEHOLDER = "-"
SEQUENCE_MARKER = "..."
DEFAULT_INDENT_SIZE = 2

_SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    date,
    time,
    timedelta,
    enum.Enum,
    UUID,
    PurePath,
)


class Shape(enum.Enum):
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    RECORD = "record"


def classify(value: Any) -> Shape:
    """Pick the rendering shape for ``value`` from its capabilities."""

    if value is None or isinstance(value, (type, *_SCALAR_TYPES)):
        return Shape.SCALAR
    if isinstance(value, Mapping) or _is_named_tuple(value):
        return Shape.RECORD
    if dataclasses.is_dataclass(value):
        return Shape.RECORD
    # one-shot iterators print as a placeholder so dumping never consumes them
    if isinstance(value, Iterator):
        return Shape.SCALAR
    if isinstance(value, Iterable):
        return Shape.SEQUENCE
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return Shape.RECORD
    return Shape.SCALAR


def format_scalar(value: Any) -> str:
    """Render a leaf value on a single line."""

    if value is None:
        return NONE_PLACEHOLDER
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, enum.Enum):
        return f"{type(value).__name__}.{value.name}"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, type):
        return f"<class {value.__module__}.{value.__qualname__}>"
    if isinstance(value, _SCALAR_TYPES):
        return str(value)
    return f"{{{_type_name(value)}}}"


class ValueDumper:
    """Renders one value per instance; not reusable across dumps."""

    def __init__(self, indent_size: int = DEFAULT_INDENT_SIZE) -> None:
        if indent_size < 0:
            raise ValueError("indent_size must not be negative.")
        self._indent_size = indent_size
        self._lines: list[str] = []
        # ids of the containers on the current recursion path
        self._active: set[int] = set()

    def dump(self, value: Any) -> str:
        self._render(value, level=0, label=None)
        return "\n".join(self._lines)

    def _write(self, level: int, text: str) -> None:
        self._lines.append(" " * (level * self._indent_size) + text)

    def _render(self, value: Any, *, level: int, label: str | None) -> None:
        prefix = "" if label is None else f"{label}: "
        shape = classify(value)
        if shape is Shape.SCALAR:
            self._write(level, prefix + format_scalar(value))
            return

        marker = id(value)
        if marker in self._active:
            self._write(level, prefix + CYCLE_MARKER)
            return

        self._active.add(marker)
        try:
            if shape is Shape.RECORD:
                self._render_record(value, level=level, prefix=prefix)
            else:
                self._render_sequence(value, level=level, prefix=prefix)
        finally:
            self._active.discard(marker)

    def _render_record(self, value: Any, *, level: int, prefix: str) -> None:
        self._write(level, f"{prefix}{{{_type_name(value)}}}")
        for name, attribute in _record_items(value):
            self._render(attribute, level=level + 1, label=name)

    def _render_sequence(self, value: Iterable[Any], *, level: int, prefix: str) -> None:
        items = list(value)
        if isinstance(value, (set, frozenset)):
            items.sort(key=lambda item: ValueDumper(self._indent_size).dump(item))
        if not items:
            self._write(level, prefix + "[]")
            return
        self._write(level, prefix + SEQUENCE_MARKER)
        for item in items:
            self._render(item, level=level + 1, label=None)


def dump(value: Any, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
    """Render ``value`` as indented text.

    Scalars print as literals with strings quoted and ``None`` as ``-``.
    Records (mappings, dataclasses, named tuples and plain objects) print a
    ``{module.Type}`` header followed by ``name: value`` lines; sequences print
    ``...`` followed by their elements. Containers already on the current
    recursion path print ``<cyclic reference>`` instead of recursing. Iterators
    print a ``{type}`` placeholder and are left unconsumed.

    Args:
        value (Any): Value to render.
        indent_size (int): Spaces per nesting level.

    Returns:
        str: Deterministic multi-line rendering.
    """

    return ValueDumper(indent_size).dump(value)


def _record_items(value: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield (key if isinstance(key, str) else format_scalar(key)), item
        return
    if _is_named_tuple(value):
        yield from value._asdict().items()
        return
    if dataclasses.is_dataclass(value):
        for field in dataclasses.fields(value):
            if not field.name.startswith("_"):
                yield field.name, getattr(value, field.name)
        return

    seen: set[str] = set()
    for name, item in getattr(value, "__dict__", {}).items():
        if not name.startswith("_"):
            seen.add(name)
            yield name, item
    for name in _slot_names(type(value)):
        if name in seen or name.startswith("_") or not hasattr(value, name):
            continue
        yield name, getattr(value, name)


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(slot for slot in slots if slot not in {"__dict__", "__weakref__"})
    return names


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(value, "_asdict") and hasattr(value, "_fields")


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"
