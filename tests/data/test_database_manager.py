from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from admin_workstation.data import DatabaseConfig, DatabaseManager, FilterPreset, FilterPresetRepository
from admin_workstation.data.sql import SchemaVersion

from tests.factories import TENANT_ID


def test_ensure_schema_is_idempotent(tmp_path) -> None:
    manager = DatabaseManager(DatabaseConfig(path=tmp_path / "nested" / "db.sqlite"))

    manager.ensure_schema()
    manager.ensure_schema()

    assert (tmp_path / "nested" / "db.sqlite").exists()
    manager.dispose()


def test_schema_version_mismatch_is_rejected(database) -> None:
    with Session(database.engine) as session:
        record = session.get(SchemaVersion, "schema_version")
        record.version = 99
        session.add(record)
        session.commit()

    with pytest.raises(RuntimeError, match="schema version 99"):
        database.ensure_schema()


def test_busy_timeout_derived_from_connect_args(tmp_path) -> None:
    config = DatabaseConfig(path=tmp_path / "db.sqlite", connect_args={"timeout": 2.5})

    assert config.busy_timeout_ms() == 2500
    assert config.uri().startswith("sqlite:///")


def test_preset_unique_constraint_backs_name_check(database) -> None:
    repository = FilterPresetRepository(database)
    repository.add(FilterPreset(id="p1", name="View", created_by="admin-1"), tenant_id=TENANT_ID)

    with pytest.raises(IntegrityError):
        repository.add(
            FilterPreset(id="p2", name="View", created_by="admin-1"),
            tenant_id=TENANT_ID,
        )
