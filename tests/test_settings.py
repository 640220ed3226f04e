from __future__ import annotations

from pathlib import Path

import pytest

from novadb import Database, get_settings
from novadb.errors import CapacityExceededError, InvalidArgumentError
from novadb.persistence import YAMLProvider


def test_defaults(sandbox_cwd: Path):
    settings = get_settings()
    assert settings.path == "database.json"
    assert settings.format == "json"
    assert settings.size == 0
    assert settings.spaces == 2


def test_environment_overrides(sandbox_cwd: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NOVADB_FORMAT", "YAML")
    monkeypatch.setenv("NOVADB_SIZE", "1")
    settings = get_settings()
    assert settings.format == "yaml"
    assert settings.path == "database.yaml"

    db = Database.from_settings(settings)
    assert isinstance(db.provider, YAMLProvider)
    db.set("a", 1)
    with pytest.raises(CapacityExceededError):
        db.set("b", 2)


def test_bad_integer_in_environment(sandbox_cwd: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NOVADB_SIZE", "lots")
    with pytest.raises(InvalidArgumentError):
        get_settings()


def test_from_env_reads_env_file(sandbox_cwd: Path):
    env_file = sandbox_cwd / "local.env"
    env_file.write_text("NOVADB_PATH=custom/store.json\nNOVADB_SPACES=0\n", encoding="utf-8")

    db = Database.from_env(env_file)
    db.set("k", "v")

    stored = sandbox_cwd / "custom" / "store.json"
    assert stored.read_text(encoding="utf-8") == '{"k": "v"}\n'


def test_from_env_applies_size_and_path_from_env_file(sandbox_cwd: Path):
    env_file = sandbox_cwd / ".env"
    env_file.write_text("NOVADB_SIZE=2\nNOVADB_PATH=data/limited.json\n", encoding="utf-8")

    db = Database.from_env(env_file)
    assert db.options.size == 2
    assert db.options.path == Path("data/limited.json")

    db.set("a", 1)
    db.set("b", 2)
    with pytest.raises(CapacityExceededError):
        db.set("c", 3)
    assert (sandbox_cwd / "data" / "limited.json").exists()


def test_from_env_without_env_file_uses_process_environment(sandbox_cwd: Path, monkeypatch: pytest.MonkeyPatch):
    # a .env file in the cwd is not read unless passed explicitly
    (sandbox_cwd / ".env").write_text("NOVADB_SIZE=5\n", encoding="utf-8")
    monkeypatch.setenv("NOVADB_SPACES", "4")

    db = Database.from_env()
    assert db.options.size == 0
    assert db.options.spaces == 4
    assert db.options.path == Path("database.json")
    assert db.provider.spaces == 4
