from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from admin_workstation.auth import Actor
from admin_workstation.data.models import (
    FilterPreset,
    FilterPresetDraft,
    FilterPresetScope,
    QuickStats,
)


@runtime_checkable
class StatsProvider(Protocol):
    """Source of aggregate directory counts for one tenant."""

    async def fetch_quick_stats(self, tenant_id: str | None) -> QuickStats: ...


@runtime_checkable
class MutationService(Protocol):
    """Executes a named bulk action against a set of entity identifiers."""

    async def apply_bulk_action(
        self,
        action_type: str,
        action_value: str,
        ids: Sequence[str],
        *,
        tenant_id: str | None = None,
    ) -> object: ...


@runtime_checkable
class FilterPresetStore(Protocol):
    """List and create saved filter presets for an authenticated actor."""

    async def list_presets(
        self,
        actor: Actor | None,
        *,
        entity_type: str = ...,
        scope: FilterPresetScope = ...,
    ) -> list[FilterPreset]: ...

    async def create_preset(
        self,
        actor: Actor | None,
        draft: FilterPresetDraft,
    ) -> FilterPreset: ...


__all__ = ["StatsProvider", "MutationService", "FilterPresetStore"]
