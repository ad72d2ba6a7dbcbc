from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep DINO_* variables from the developer's shell out of the tests.
    """
    for name in ("DINO_JSON_INDENT", "DINO_JSON_SORT_KEYS", "DINO_ENCODING", "DINO_DEBUG_LOG_WRITES"):
        # setenv first so variables a test loads from a dotenv file are removed afterwards.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "db.json"
