from __future__ import annotations

import contextlib
import threading
from pathlib import Path
from typing import Iterator


class PathLockRegistry:
    """
    Hands out one lock per resolved file path, so providers pointing at the
    same file serialize their reads and writes within this process.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def lock_for(self, path: Path) -> threading.RLock:
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextlib.contextmanager
    def locked(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield


PROVIDER_LOCKS = PathLockRegistry()
