from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "AdminWorkstation"
ENV_PREFIX = "ADMIN_WORKSTATION_"
ENV_FILE_NAME = "settings.env"
DATABASE_NAME = "admin-workstation.db"

DEFAULT_ENTITY_TYPE = "users"
DEFAULT_API_TIMEOUT = 30.0


def _config_dir() -> Path:
    path = Path(user_config_dir(APP_NAME, roaming=True))
    path.mkdir(parents=True, exist_ok=True)
    return path


def _cache_dir() -> Path:
    path = Path(user_cache_dir(APP_NAME))
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_dir() -> Path:
    return _config_dir()


def cache_dir() -> Path:
    return _cache_dir()


def log_dir() -> Path:
    path = cache_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _env_file_path(explicit: Path | None) -> Path:
    if explicit is not None:
        return explicit
    return _config_dir() / ENV_FILE_NAME


@dataclass(slots=True)
class Settings:
    """Tenant binding plus the backing-store location for the workstation.

    When ``api_base_url`` is set, stats, bulk mutations and filter presets are
    served by the remote admin API. Otherwise the local SQLite store is used.
    """

    tenant_id: str | None = None
    user_id: str | None = None
    database_path: Path = field(default_factory=lambda: _cache_dir() / DATABASE_NAME)
    api_base_url: str | None = None
    api_token: str | None = None
    api_timeout: float = DEFAULT_API_TIMEOUT
    default_entity_type: str = DEFAULT_ENTITY_TYPE
    log_level: str = "INFO"

    @property
    def uses_remote_api(self) -> bool:
        return bool(self.api_base_url)


class SettingsManager:
    """Load and persist application settings with environment overrides."""

    def __init__(self, env_file: Path | None = None) -> None:
        self._env_file = _env_file_path(env_file)

    @property
    def env_file(self) -> Path:
        return self._env_file

    def load(self) -> Settings:
        """Load settings from environment, falling back to persisted file."""
        load_dotenv(self._env_file, override=False)

        settings = Settings(
            tenant_id=self._get_env("TENANT_ID"),
            user_id=self._get_env("USER_ID"),
            api_base_url=self._get_env("API_BASE_URL"),
            api_token=self._get_env("API_TOKEN"),
        )

        database_override = self._get_env("DATABASE_PATH")
        if database_override:
            settings.database_path = Path(database_override).expanduser()

        timeout = self._get_env("API_TIMEOUT")
        if timeout:
            try:
                settings.api_timeout = float(timeout)
            except ValueError:
                pass

        entity_type = self._get_env("DEFAULT_ENTITY_TYPE")
        if entity_type:
            settings.default_entity_type = entity_type

        log_level = self._get_env("LOG_LEVEL")
        if log_level:
            settings.log_level = log_level.upper()

        return settings

    def save(self, settings: Settings) -> None:
        """Persist configuration fields to the managed env file."""
        self._env_file.parent.mkdir(parents=True, exist_ok=True)
        content = [
            f"{ENV_PREFIX}TENANT_ID={settings.tenant_id or ''}",
            f"{ENV_PREFIX}USER_ID={settings.user_id or ''}",
            f"{ENV_PREFIX}DATABASE_PATH={settings.database_path}",
            f"{ENV_PREFIX}API_BASE_URL={settings.api_base_url or ''}",
            f"{ENV_PREFIX}API_TOKEN={settings.api_token or ''}",
            f"{ENV_PREFIX}API_TIMEOUT={settings.api_timeout}",
            f"{ENV_PREFIX}DEFAULT_ENTITY_TYPE={settings.default_entity_type}",
            f"{ENV_PREFIX}LOG_LEVEL={settings.log_level}",
        ]
        self._env_file.write_text("\n".join(content) + "\n", encoding="utf-8")

    def _get_env(self, name: str) -> str | None:
        return os.getenv(f"{ENV_PREFIX}{name}") or None


__all__ = [
    "DEFAULT_ENTITY_TYPE",
    "Settings",
    "SettingsManager",
    "cache_dir",
    "config_dir",
    "log_dir",
]
