"""Tenant-scoped services backing the admin workstation."""

from .base import (
    EventHook,
    MutationStatus,
    RefreshEvent,
    ServiceErrorEvent,
    run_optimistic_mutation,
)
from .contracts import FilterPresetStore, MutationService, StatsProvider
from .filter_presets import FilterPresetService
from .registry import ServiceRegistry
from .stats import UserStatsService
from .team_members import TeamMemberService, parse_team_member_draft
from .users import (
    BulkActionType,
    BulkMutationEvent,
    UserDirectoryService,
    resolve_bulk_changes,
)

__all__ = [
    "EventHook",
    "MutationStatus",
    "RefreshEvent",
    "ServiceErrorEvent",
    "run_optimistic_mutation",
    "FilterPresetStore",
    "MutationService",
    "StatsProvider",
    "FilterPresetService",
    "ServiceRegistry",
    "UserStatsService",
    "TeamMemberService",
    "parse_team_member_draft",
    "BulkActionType",
    "BulkMutationEvent",
    "UserDirectoryService",
    "resolve_bulk_changes",
]
