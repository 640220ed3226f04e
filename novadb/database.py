from __future__ import annotations

import logging
import operator as op
from pathlib import Path
from typing import Any, Callable, Iterator

from dotenv import load_dotenv
from pydantic import ValidationError

from . import keypath
from ._version import __version__
from .errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NotFoundError,
    NovaDBError,
    TypeMismatchError,
)
from .keypath import ABSENT, ValueKind, kind_of
from .models import DatabaseOptions, Entry
from .persistence.disk_store import provider_for
from .persistence.interfaces import DocumentProvider
from .settings import Settings, get_settings
from .validation import ensure_bool, ensure_callable, ensure_index, ensure_int, ensure_number, ensure_str

logger = logging.getLogger(__name__)

_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "+": op.add,
    "-": op.sub,
    "*": op.mul,
    "**": op.pow,
    "/": op.truediv,
    "%": op.mod,
}


class Database:
    """
    A single JSON-like document addressed with dotted paths.

    Every operation loads the whole document from the provider, works on it in
    memory and, when it mutates, writes the whole document back. Nothing is
    cached between calls, and nothing guards the load/write pair against other
    writers: concurrent writers race and the last write wins.

        db = Database(path="data.json")
        db.set("nova.version", "1.0.0")
        db.get("nova")  # {"version": "1.0.0"}

    ``size`` counts successful ``set`` calls minus ``delete`` calls on this
    instance. It is only used for the soft capacity and is never reconciled
    with the stored document.
    """

    version = __version__

    def __init__(
        self,
        *,
        path: str | Path | None = None,
        size: int = 0,
        spaces: int = 2,
        format: str = "json",
        provider: DocumentProvider | None = None,
    ):
        try:
            self.options = DatabaseOptions(path=path, size=size, spaces=spaces, format=format, provider=provider)
        except ValidationError as e:
            raise InvalidArgumentError(f"invalid database options: {e}") from e

        if self.options.provider is not None:
            self._provider = self.options.provider
        else:
            self._provider = provider_for(self.options.format, self.options.path, spaces=self.options.spaces)
        self._size = 0

    @classmethod
    def from_settings(cls, settings: Settings, *, provider: DocumentProvider | None = None) -> "Database":
        return cls(
            path=settings.path,
            size=settings.size,
            spaces=settings.spaces,
            format=settings.format,
            provider=provider,
        )

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Database":
        if env_file is not None:
            load_dotenv(env_file)
        return cls.from_settings(get_settings())

    @property
    def provider(self) -> DocumentProvider:
        return self._provider

    @property
    def size(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Database(provider={self._provider!r}, size={self._size})"

    def __len__(self) -> int:
        return len(self._provider.load())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._provider.load()))

    # ------------------------------------------------------------------
    # Core path operations
    # ------------------------------------------------------------------

    def set(self, path: str, value: Any) -> Any:
        segments = keypath.parse(path)

        cap = self.options.size
        if cap > 0 and self._size >= cap:
            raise CapacityExceededError(f"database limit of {cap} exceeded")

        doc = self._provider.load()
        keypath.set(doc, segments, value)
        self._provider.write(doc)

        self._size += 1
        logger.debug("SET %s (size=%d)", path, self._size)
        return value

    def get(self, path: str, default: Any = None) -> Any:
        value = keypath.get(self._provider.load(), keypath.parse(path))
        return default if value is ABSENT else value

    def exists(self, path: str) -> bool:
        return keypath.has(self._provider.load(), keypath.parse(path))

    def has(self, path: str) -> bool:
        return self.exists(path)

    def update(self, path: str, value: Any) -> Any:
        """
        Replace the value at ``path``, or set it when absent.

        An existing key keeps its position. The counter is decremented as by
        ``delete`` and incremented again by ``set``, so it ends unchanged.
        """
        if not self.exists(path):
            return self.set(path, value)

        self._size -= 1
        try:
            return self.set(path, value)
        except NovaDBError:
            self._size += 1
            raise

    def delete(self, path: str) -> bool:
        segments = keypath.parse(path)

        doc = self._provider.load()
        removed = keypath.unset(doc, segments)
        if removed:
            self._provider.write(doc)

        self._size -= 1
        logger.debug("DELETE %s removed=%s (size=%d)", path, removed, self._size)
        return removed

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def all(self, limit: int = 0) -> list[Entry]:
        limit = ensure_int("limit", limit)
        entries = [Entry(key=key, value=value) for key, value in self._provider.load().items()]
        if limit > 0:
            entries = entries[:limit]
        return entries

    def to_lists(self) -> tuple[list[str], list[Any]]:
        keys: list[str] = []
        values: list[Any] = []
        for entry in self.all():
            keys.append(entry.key)
            values.append(entry.value)
        return keys, values

    def to_object(self) -> dict[str, Any]:
        return {entry.key: entry.value for entry in self.all()}

    def key_at(self, index: int = 0) -> str:
        index = ensure_index("index", index)
        keys, _ = self.to_lists()
        if index >= len(keys):
            raise IndexOutOfRangeError(f"key index {index} out of range for {len(keys)} entries")
        return keys[index]

    def value_at(self, index: int = 0) -> Any:
        index = ensure_index("index", index)
        _, values = self.to_lists()
        if index >= len(values):
            raise IndexOutOfRangeError(f"value index {index} out of range for {len(values)} entries")
        return values[index]

    # ------------------------------------------------------------------
    # Scans over top-level entries
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[Any, int], Any]) -> list[Any]:
        ensure_callable("predicate", predicate)
        _, values = self.to_lists()
        return [value for index, value in enumerate(values) if predicate(value, index)]

    def find(self, predicate: Callable[[Any, int], Any], default: Any = None) -> Any:
        ensure_callable("predicate", predicate)
        _, values = self.to_lists()
        for index, value in enumerate(values):
            if predicate(value, index):
                return value
        return default

    def find_update(self, value: Any, predicate: Callable[[Entry, int], Any]) -> int:
        ensure_callable("predicate", predicate)
        updated = 0
        for index, entry in enumerate(self.all()):
            if predicate(entry, index):
                self.update(entry.key, value)
                updated += 1
        return updated

    def find_delete(self, predicate: Callable[[Entry, int], Any]) -> int:
        ensure_callable("predicate", predicate)
        deleted = 0
        for index, entry in enumerate(self.all()):
            if predicate(entry, index):
                self.delete(entry.key)
                deleted += 1
        return deleted

    def for_each(self, visitor: Callable[[Any, int], Any]) -> None:
        ensure_callable("visitor", visitor)
        for index, entry in enumerate(self.all()):
            visitor(entry.value, index)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def push(self, path: str, *values: Any) -> list[Any]:
        """
        Store exactly ``values`` as a list at ``path``.

        This replaces an existing list, it does not append to it.
        """
        keypath.parse(path)
        current = self.get(path, ABSENT)
        items = list(values)

        kind = kind_of(current)
        if kind in (ValueKind.ABSENT, ValueKind.NULL):
            self.set(path, items)
        elif kind is ValueKind.LIST:
            self.update(path, items)
        else:
            raise TypeMismatchError(f"{current!r} at {path!r} is not a list")
        return items

    def pull(self, path: str, predicate: Callable[[Any, int, list[Any]], Any]) -> list[Any]:
        """Drop the elements of the list at ``path`` for which ``predicate(value, index, list)`` is true."""
        keypath.parse(path)
        ensure_callable("predicate", predicate)

        current = self.get(path, ABSENT)
        if current is ABSENT:
            raise NotFoundError(path)
        if kind_of(current) is not ValueKind.LIST:
            raise TypeMismatchError(f"{current!r} at {path!r} is not a list")

        kept = [value for index, value in enumerate(current) if not predicate(value, index, current)]
        self.update(path, kept)
        return kept

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def add(self, path: str, amount: int | float = 1, allow_negative: bool = False) -> int | float:
        return self._accumulate(path, "+", amount, allow_negative)

    def sub(self, path: str, amount: int | float = 1, allow_negative: bool = False) -> int | float:
        return self._accumulate(path, "-", amount, allow_negative)

    def math(self, path: str, operator: str, operand: int | float, allow_negative: bool = False) -> int | float:
        """
        Apply ``operator`` (one of ``+ - * ** / %``) to the number at ``path``.

        An absent path starts from 0. Unless ``allow_negative`` is set, any
        result below 1 is stored as 0.
        """
        keypath.parse(path)
        current = self.get(path, ABSENT)
        if current is ABSENT:
            current = 0
        return self._apply(path, current, operator, operand, allow_negative)

    def _accumulate(self, path: str, operator: str, amount: Any, allow_negative: Any) -> int | float:
        keypath.parse(path)
        return self._apply(path, self.get(path, ABSENT), operator, amount, allow_negative)

    def _apply(
        self,
        path: str,
        current: Any,
        operator: Any,
        operand: Any,
        allow_negative: Any,
    ) -> int | float:
        operator = ensure_str("operator", operator)
        operand = ensure_number("amount", operand)
        allow_negative = ensure_bool("allow_negative", allow_negative)

        fn = _OPERATORS.get(operator)
        if fn is None:
            raise InvalidArgumentError(f"unknown operator {operator!r}, expected one of {list(_OPERATORS)}")
        if kind_of(current) is not ValueKind.NUMBER:
            raise TypeMismatchError(f"{current!r} at {path!r} is not a number")

        try:
            result = fn(current, operand)
        except (ZeroDivisionError, OverflowError) as e:
            raise InvalidArgumentError(f"cannot compute {current!r} {operator} {operand!r}") from e
        if isinstance(result, complex):
            raise InvalidArgumentError(f"{current!r} {operator} {operand!r} is not a real number")

        if not allow_negative and result < 1:
            result = 0

        self.update(path, result)
        return result

    def type_of(self, path: str) -> str:
        """Coarse type of the value at ``path``: ``array``, ``NaN``, ``finite``, or the primitive name."""
        return keypath.type_tag(self.get(path, ABSENT))
