from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

import project_storage.data.db as app_db
from project_storage.data.db import init_db


@pytest.fixture
def temp_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Use a temporary SQLite DB, created fresh for each test."""
    db_path = tmp_path / "storage.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    app_db.reset_engine()
    init_db()
    yield db_path
    # Dispose engine to release connections
    app_db.reset_engine()


@pytest.fixture(autouse=True)
def _api_temp_db(request: pytest.FixtureRequest) -> None:
    """Automatically use the temp_db fixture for tests in API test files."""
    test_file_path = Path(str(request.node.fspath))
    if "api" in test_file_path.stem.lower():
        request.getfixturevalue("temp_db")
