from __future__ import annotations

import asyncio
from typing import Any, Callable

from .database import Database
from .models import Entry


class AsyncDatabase:
    """
    Async wrapper around Database.
    Uses asyncio.to_thread to avoid blocking the event loop on provider I/O.

    Calls are not serialized: two overlapping mutations race the same way two
    threads calling the synchronous Database would.
    """

    def __init__(self, database: Database | None = None, **options: Any) -> None:
        self._db = database if database is not None else Database(**options)

    @property
    def database(self) -> Database:
        return self._db

    @property
    def size(self) -> int:
        return self._db.size

    async def set(self, path: str, value: Any) -> Any:
        return await asyncio.to_thread(self._db.set, path, value)

    async def get(self, path: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self._db.get, path, default)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._db.exists, path)

    async def has(self, path: str) -> bool:
        return await self.exists(path)

    async def update(self, path: str, value: Any) -> Any:
        return await asyncio.to_thread(self._db.update, path, value)

    async def delete(self, path: str) -> bool:
        return await asyncio.to_thread(self._db.delete, path)

    async def all(self, limit: int = 0) -> list[Entry]:
        return await asyncio.to_thread(self._db.all, limit)

    async def to_lists(self) -> tuple[list[str], list[Any]]:
        return await asyncio.to_thread(self._db.to_lists)

    async def to_object(self) -> dict[str, Any]:
        return await asyncio.to_thread(self._db.to_object)

    async def key_at(self, index: int = 0) -> str:
        return await asyncio.to_thread(self._db.key_at, index)

    async def value_at(self, index: int = 0) -> Any:
        return await asyncio.to_thread(self._db.value_at, index)

    async def filter(self, predicate: Callable[[Any, int], Any]) -> list[Any]:
        return await asyncio.to_thread(self._db.filter, predicate)

    async def find(self, predicate: Callable[[Any, int], Any], default: Any = None) -> Any:
        return await asyncio.to_thread(self._db.find, predicate, default)

    async def find_update(self, value: Any, predicate: Callable[[Entry, int], Any]) -> int:
        return await asyncio.to_thread(self._db.find_update, value, predicate)

    async def find_delete(self, predicate: Callable[[Entry, int], Any]) -> int:
        return await asyncio.to_thread(self._db.find_delete, predicate)

    async def for_each(self, visitor: Callable[[Any, int], Any]) -> None:
        await asyncio.to_thread(self._db.for_each, visitor)

    async def push(self, path: str, *values: Any) -> list[Any]:
        return await asyncio.to_thread(self._db.push, path, *values)

    async def pull(self, path: str, predicate: Callable[[Any, int, list[Any]], Any]) -> list[Any]:
        return await asyncio.to_thread(self._db.pull, path, predicate)

    async def add(self, path: str, amount: int | float = 1, allow_negative: bool = False) -> int | float:
        return await asyncio.to_thread(self._db.add, path, amount, allow_negative)

    async def sub(self, path: str, amount: int | float = 1, allow_negative: bool = False) -> int | float:
        return await asyncio.to_thread(self._db.sub, path, amount, allow_negative)

    async def math(self, path: str, operator: str, operand: int | float, allow_negative: bool = False) -> int | float:
        return await asyncio.to_thread(self._db.math, path, operator, operand, allow_negative)

    async def type_of(self, path: str) -> str:
        return await asyncio.to_thread(self._db.type_of, path)
