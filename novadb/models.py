from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from .persistence.interfaces import DocumentProvider


class Entry(BaseModel):
    """A top-level key of the document and the full value stored under it."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any


class DatabaseOptions(BaseModel):
    """
    Constructor options of a Database.

    ``size`` is the soft capacity: the number of ``set`` calls allowed before
    CapacityExceededError (0 means unlimited). ``spaces`` is the JSON indent.
    ``path`` and ``format`` are ignored when a provider is given.
    """

    model_config = ConfigDict(extra="forbid")

    path: Path | None = None
    size: StrictInt = Field(default=0, ge=0)
    spaces: StrictInt = Field(default=2, ge=0)
    format: Literal["json", "yaml", "bson"] = "json"
    provider: Any = None

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, DocumentProvider):
            raise ValueError("provider must implement load() and write()")
        return value
