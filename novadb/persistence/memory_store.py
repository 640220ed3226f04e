from __future__ import annotations

import copy
from typing import Any, Mapping

from .interfaces import DocumentProvider


class MemoryDocumentProvider(DocumentProvider):
    """
    Keeps the document in process memory.

    Both load and write copy the document, so the stored state only changes
    through write().
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._doc: dict[str, Any] = copy.deepcopy(dict(initial or {}))
        self.writes = 0

    def load(self) -> dict[str, Any]:
        return copy.deepcopy(self._doc)

    def write(self, doc: dict[str, Any]) -> None:
        self._doc = copy.deepcopy(doc)
        self.writes += 1
