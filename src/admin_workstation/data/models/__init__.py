"""Domain models for the workstation directory, presets and stats."""

from .common import DomainModel, TenantResource, TimestampedResource
from .filters import (
    DateRange,
    FilterLogic,
    FilterPredicate,
    FilterPreset,
    FilterPresetDraft,
    FilterPresetScope,
    Role,
    Status,
)
from .stats import QuickStats
from .users import (
    DirectoryUser,
    OnboardingState,
    TeamMember,
    TeamMemberDraft,
    TeamMemberStatus,
)

__all__ = [
    "DomainModel",
    "TenantResource",
    "TimestampedResource",
    "DateRange",
    "FilterLogic",
    "FilterPredicate",
    "FilterPreset",
    "FilterPresetDraft",
    "FilterPresetScope",
    "Role",
    "Status",
    "QuickStats",
    "DirectoryUser",
    "OnboardingState",
    "TeamMember",
    "TeamMemberDraft",
    "TeamMemberStatus",
]
