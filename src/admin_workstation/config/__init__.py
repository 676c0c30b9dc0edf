"""Configuration helpers for the admin workstation."""

from .settings import DEFAULT_ENTITY_TYPE, Settings, SettingsManager

__all__ = [
    "DEFAULT_ENTITY_TYPE",
    "Settings",
    "SettingsManager",
]
