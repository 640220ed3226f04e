from __future__ import annotations


class NovaDBError(Exception):
    """Base class for every error raised by novadb."""


class InvalidArgumentError(NovaDBError, TypeError):
    """An argument or option has the wrong primitive type or an invalid value."""


class InvalidPathError(NovaDBError, ValueError):
    """A path string is empty or contains an empty segment."""


class CapacityExceededError(NovaDBError):
    """The soft capacity of the database has been reached."""


class IndexOutOfRangeError(NovaDBError, IndexError):
    """An index is at or beyond the number of top-level entries."""


class TypeMismatchError(NovaDBError, TypeError):
    """A stored value (or callback) does not have the type the operation needs."""


class NotFoundError(NovaDBError, KeyError):
    """No value is stored at the requested path."""


class ProviderError(NovaDBError):
    """A provider failed to load or persist the document."""
