from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection,
# even when the package has not been installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def memory_provider():
    from novadb.persistence import MemoryDocumentProvider

    return MemoryDocumentProvider()


@pytest.fixture
def db(memory_provider):
    from novadb import Database

    return Database(provider=memory_provider)


@pytest.fixture
def sandbox_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run the test from a temp directory so default database files never land in the repo.
    """
    monkeypatch.chdir(tmp_path)
    for name in ("NOVADB_PATH", "NOVADB_SIZE", "NOVADB_SPACES", "NOVADB_FORMAT"):
        # set before deleting so monkeypatch also rolls back values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path
