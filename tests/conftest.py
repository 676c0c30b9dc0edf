from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from PySide6.QtWidgets import QApplication

from admin_workstation.data import DatabaseConfig, DatabaseManager


os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app() -> Iterator[QApplication]:
    """Ensure a QApplication instance exists for UI tests."""

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def database(tmp_path) -> Iterator[DatabaseManager]:
    """Create an isolated SQLite database for repository tests."""

    db_path = tmp_path / "workstation.db"
    manager = DatabaseManager(DatabaseConfig(path=db_path))
    manager.ensure_schema()
    yield manager
    manager.dispose()
