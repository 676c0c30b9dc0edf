"""Data layer: domain models, SQLModel records and repositories."""

from .models import *  # noqa: F401,F403
from .models import __all__ as _model_exports
from .repositories import (
    DirectoryUserRepository,
    FilterPresetRepository,
    TeamMemberRepository,
    TenantScopedRepository,
)
from .sql import DatabaseConfig, DatabaseManager
from .validation import PayloadValidator, ValidationIssue

__all__ = [
    *_model_exports,
    "DatabaseConfig",
    "DatabaseManager",
    "DirectoryUserRepository",
    "FilterPresetRepository",
    "TeamMemberRepository",
    "TenantScopedRepository",
    "PayloadValidator",
    "ValidationIssue",
]
