from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentProvider(Protocol):
    """
    Persistence contract of a database: the whole document in, the whole document out.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (empty dict when nothing was stored yet)."""
        ...

    def write(self, doc: dict[str, Any]) -> None:
        """Replace the stored document with ``doc``, all-or-nothing."""
        ...
