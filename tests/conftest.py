from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import localdb...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """
    Backing file inside a not-yet-existing directory, so tests also cover parent creation.
    """
    return tmp_path / "data" / "local-db.json"


@pytest.fixture
def sandbox_env(monkeypatch: pytest.MonkeyPatch, db_path: Path) -> Path:
    """
    Point LOCAL_DB_PATH at a temp file so tests never touch a real ./data.
    """
    monkeypatch.setenv("LOCAL_DB_PATH", str(db_path))
    monkeypatch.delenv("DEBUG_LOG_REQUESTS", raising=False)
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return db_path
