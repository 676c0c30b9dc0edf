from __future__ import annotations

from pathlib import Path

import pytest

from admin_workstation.config import Settings, SettingsManager


def test_load_reads_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_WORKSTATION_TENANT_ID", "tenant-a")
    monkeypatch.setenv("ADMIN_WORKSTATION_API_BASE_URL", "https://admin.example.com")
    monkeypatch.setenv("ADMIN_WORKSTATION_API_TIMEOUT", "12.5")
    monkeypatch.setenv("ADMIN_WORKSTATION_DATABASE_PATH", str(tmp_path / "db.sqlite"))
    monkeypatch.setenv("ADMIN_WORKSTATION_LOG_LEVEL", "debug")

    settings = SettingsManager(tmp_path / "settings.env").load()

    assert settings.tenant_id == "tenant-a"
    assert settings.uses_remote_api is True
    assert settings.api_timeout == 12.5
    assert settings.database_path == tmp_path / "db.sqlite"
    assert settings.log_level == "DEBUG"


def test_invalid_timeout_keeps_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_WORKSTATION_API_TIMEOUT", "soon")

    settings = SettingsManager(tmp_path / "settings.env").load()

    assert settings.api_timeout == Settings().api_timeout


def test_save_writes_prefixed_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "config" / "settings.env"
    manager = SettingsManager(env_file)

    manager.save(Settings(tenant_id="tenant-a", database_path=tmp_path / "db.sqlite"))

    content = env_file.read_text(encoding="utf-8")
    assert "ADMIN_WORKSTATION_TENANT_ID=tenant-a" in content
    assert "ADMIN_WORKSTATION_API_BASE_URL=" in content
