from __future__ import annotations

from dataclasses import dataclass

from .contracts import FilterPresetStore, MutationService, StatsProvider
from .filter_presets import FilterPresetService
from .stats import UserStatsService
from .team_members import TeamMemberService
from .users import UserDirectoryService


@dataclass(slots=True)
class ServiceRegistry:
    """Container for the collaborators a workstation session is wired to.

    ``stats``, ``mutations`` and ``presets`` hold whichever implementation is
    active, local services or remote API adapters.
    """

    directory: UserDirectoryService | None = None
    team_members: TeamMemberService | None = None
    stats: StatsProvider | None = None
    mutations: MutationService | None = None
    presets: FilterPresetStore | None = None
    local_stats: UserStatsService | None = None
    local_presets: FilterPresetService | None = None


__all__ = ["ServiceRegistry"]
