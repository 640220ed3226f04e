"""
Dotted key paths over JSON-like trees.

A path such as ``"nova.version"`` is split on ``.`` into segments; each
segment names a key one level deeper. Mappings are addressed by key, lists by
a non-negative decimal index. There is no escaping: keys cannot contain dots.

Reads never raise for a missing or non-traversable path, they return the
``ABSENT`` sentinel instead. Writes create missing intermediate containers as
mappings.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

from .errors import InvalidArgumentError, InvalidPathError, TypeMismatchError

logger = logging.getLogger(__name__)

SEPARATOR = "."


class _Absent:
    """Marker for "no value at this path" (distinct from a stored ``None``)."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


class ValueKind(str, Enum):
    ABSENT = "absent"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAPPING = "mapping"
    OTHER = "other"


def kind_of(value: Any) -> ValueKind:
    """Classify a value into the closed set of document value kinds."""
    if value is ABSENT:
        return ValueKind.ABSENT
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.OTHER


def is_container(value: Any) -> bool:
    return kind_of(value) in (ValueKind.LIST, ValueKind.MAPPING)


def parse(path: Any) -> tuple[str, ...]:
    if not isinstance(path, str):
        raise InvalidArgumentError(f"path must be a string, got {path!r}")
    if not path:
        raise InvalidPathError("path must not be empty")
    segments = tuple(path.split(SEPARATOR))
    if any(not s for s in segments):
        raise InvalidPathError(f"path {path!r} contains an empty segment")
    return segments


def _list_index(segment: str) -> int | None:
    # Only plain decimal digits: no sign, no whitespace.
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _child(node: Any, segment: str) -> Any:
    kind = kind_of(node)
    if kind is ValueKind.MAPPING:
        return node.get(segment, ABSENT)
    if kind is ValueKind.LIST:
        index = _list_index(segment)
        if index is None or index >= len(node):
            return ABSENT
        return node[index]
    return ABSENT


def get(doc: dict[str, Any], path: str | tuple[str, ...]) -> Any:
    segments = parse(path) if isinstance(path, str) else path
    node: Any = doc
    for segment in segments:
        node = _child(node, segment)
        if node is ABSENT:
            return ABSENT
    return node


def has(doc: dict[str, Any], path: str | tuple[str, ...]) -> bool:
    return get(doc, path) is not ABSENT


def _assign(node: Any, segment: str, value: Any, path: tuple[str, ...]) -> None:
    if kind_of(node) is ValueKind.MAPPING:
        node[segment] = value
        return
    index = _list_index(segment)
    if index is None or index > len(node):
        raise TypeMismatchError(
            f"segment {segment!r} of {SEPARATOR.join(path)!r} is not a valid index for a list of length {len(node)}"
        )
    if index == len(node):
        node.append(value)
    else:
        node[index] = value


def set(doc: dict[str, Any], path: str | tuple[str, ...], value: Any) -> dict[str, Any]:
    """
    Assign ``value`` at ``path`` inside ``doc`` (mutated in place and returned).

    Missing intermediates become ``{}``. An intermediate that holds a scalar is
    replaced by ``{}``; whatever it held is lost.
    """
    segments = parse(path) if isinstance(path, str) else path
    node: Any = doc
    for depth, segment in enumerate(segments[:-1]):
        nxt = _child(node, segment)
        if not is_container(nxt):
            if nxt is not ABSENT:
                logger.debug(
                    "Replacing %s at %r with a mapping",
                    kind_of(nxt).value,
                    SEPARATOR.join(segments[: depth + 1]),
                )
            nxt = {}
            _assign(node, segment, nxt, segments)
        node = nxt
    _assign(node, segments[-1], value, segments)
    return doc


def unset(doc: dict[str, Any], path: str | tuple[str, ...]) -> bool:
    segments = parse(path) if isinstance(path, str) else path
    parent = get(doc, segments[:-1]) if len(segments) > 1 else doc
    last = segments[-1]
    kind = kind_of(parent)
    if kind is ValueKind.MAPPING:
        if last not in parent:
            return False
        del parent[last]
        return True
    if kind is ValueKind.LIST:
        index = _list_index(last)
        if index is None or index >= len(parent):
            return False
        parent.pop(index)
        return True
    return False


def type_tag(value: Any) -> str:
    """
    Coarse type name of a stored value: ``array``, ``NaN``, ``finite`` or the primitive name.

    No coercion is applied: strings and mappings are never ``NaN``, and booleans
    and ``None`` are never ``finite``. Only float NaN is ``NaN``.
    """
    kind = kind_of(value)
    if kind is ValueKind.LIST:
        return "array"
    if kind is ValueKind.NUMBER:
        if isinstance(value, float) and math.isnan(value):
            return "NaN"
        if isinstance(value, float) and math.isinf(value):
            return "number"
        return "finite"
    return {
        ValueKind.ABSENT: "undefined",
        ValueKind.NULL: "null",
        ValueKind.BOOLEAN: "boolean",
        ValueKind.STRING: "string",
        ValueKind.MAPPING: "object",
    }.get(kind, type(value).__name__)
