from __future__ import annotations

from .disk_store import BSONProvider, DiskDocumentProvider, JSONProvider, YAMLProvider, provider_for
from .interfaces import DocumentProvider
from .memory_store import MemoryDocumentProvider

__all__ = [
    "DocumentProvider",
    "DiskDocumentProvider",
    "JSONProvider",
    "YAMLProvider",
    "BSONProvider",
    "MemoryDocumentProvider",
    "provider_for",
]
