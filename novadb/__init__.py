from __future__ import annotations

from ._version import __version__
from .async_database import AsyncDatabase
from .database import Database
from .errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidPathError,
    NotFoundError,
    NovaDBError,
    ProviderError,
    TypeMismatchError,
)
from .keypath import ABSENT, ValueKind
from .models import DatabaseOptions, Entry
from .persistence import (
    BSONProvider,
    DocumentProvider,
    JSONProvider,
    MemoryDocumentProvider,
    YAMLProvider,
)
from .settings import Settings, get_settings

__all__ = [
    "__version__",
    "Database",
    "AsyncDatabase",
    "DatabaseOptions",
    "Entry",
    "ABSENT",
    "ValueKind",
    "DocumentProvider",
    "JSONProvider",
    "YAMLProvider",
    "BSONProvider",
    "MemoryDocumentProvider",
    "Settings",
    "get_settings",
    "NovaDBError",
    "InvalidArgumentError",
    "InvalidPathError",
    "CapacityExceededError",
    "IndexOutOfRangeError",
    "TypeMismatchError",
    "NotFoundError",
    "ProviderError",
]
