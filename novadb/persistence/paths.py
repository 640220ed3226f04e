from __future__ import annotations

from pathlib import Path

DEFAULT_STEM = "database"

EXTENSIONS = {
    "json": ".json",
    "yaml": ".yaml",
    "bson": ".bson",
}


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_database_path(fmt: str = "json") -> Path:
    # database.json (or .yaml / .bson) in the current working directory
    return Path.cwd() / f"{DEFAULT_STEM}{EXTENSIONS.get(fmt, '.' + fmt)}"


def resolve_database_path(path: str | Path | None, fmt: str = "json") -> Path:
    if path is None or str(path) == "":
        return default_database_path(fmt)
    return Path(path).expanduser()
