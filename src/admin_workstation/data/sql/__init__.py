"""SQLModel schema and database management."""

from .engine import DatabaseConfig, DatabaseManager, SCHEMA_VERSION
from .models import (
    DirectoryUserRecord,
    FilterPresetRecord,
    SchemaVersion,
    TeamMemberRecord,
)

__all__ = [
    "DatabaseConfig",
    "DatabaseManager",
    "SCHEMA_VERSION",
    "DirectoryUserRecord",
    "FilterPresetRecord",
    "TeamMemberRecord",
    "SchemaVersion",
]
