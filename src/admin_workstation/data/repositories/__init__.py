"""Tenant-scoped repositories backed by SQLModel."""

from .base import TenantScopedRepository
from .filter_presets import FilterPresetRepository
from .team_members import TeamMemberRepository
from .users import DirectoryUserRepository

__all__ = [
    "TenantScopedRepository",
    "DirectoryUserRepository",
    "FilterPresetRepository",
    "TeamMemberRepository",
]
