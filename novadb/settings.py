from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import InvalidArgumentError


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise InvalidArgumentError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # Storage
    path: str
    format: str

    # Soft capacity (0 = unlimited)
    size: int

    # JSON indent
    spaces: int


def get_settings() -> Settings:
    fmt = _env_str("NOVADB_FORMAT", "json").lower()
    path = _env_str("NOVADB_PATH", f"database.{fmt}")

    return Settings(
        path=path,
        format=fmt,
        size=_env_int("NOVADB_SIZE", 0),
        spaces=_env_int("NOVADB_SPACES", 2),
    )
