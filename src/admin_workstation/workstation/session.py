from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Callable

from admin_workstation.data import FilterPredicate, QuickStats
from admin_workstation.services.base import EventHook
from admin_workstation.services.contracts import MutationService, StatsProvider
from admin_workstation.utils import utc_now

from .bulk import BulkActionController, BulkActionPhase
from .filters import FilterState
from .selection import SelectionModel
from .stats import QuickStatsCache


class MainContentLayout(StrEnum):
    FULL = "full"
    SPLIT = "split"


@dataclass(frozen=True, slots=True)
class LayoutState:
    sidebar_open: bool = True
    insights_panel_open: bool = True
    main_content_layout: MainContentLayout = MainContentLayout.SPLIT


@dataclass(frozen=True, slots=True)
class WorkstationSnapshot:
    """Consistent, read-only view of the session for presentation."""

    layout: LayoutState
    filter: FilterPredicate
    selected_ids: frozenset[str]
    quick_stats: QuickStats
    stats_loading: bool
    is_loading: bool
    bulk_phase: BulkActionPhase
    bulk_action_type: str
    bulk_action_value: str

    @property
    def selection_count(self) -> int:
        return len(self.selected_ids)

    @property
    def is_applying_bulk_action(self) -> bool:
        return self.bulk_phase is not BulkActionPhase.IDLE


class WorkstationSession:
    """Composition root for one actor's workstation state.

    Sub-components are exposed as-is (``filters``, ``selection``,
    ``quick_stats`` and ``bulk_actions``). Any change to them, or to the
    layout flags, emits a fresh :class:`WorkstationSnapshot` on ``changed``.
    """

    def __init__(
        self,
        *,
        tenant_id: str | None = None,
        stats_provider: StatsProvider | None = None,
        mutations: MutationService | None = None,
        initial_stats: QuickStats | None = None,
        initial_filter: FilterPredicate | None = None,
        layout: LayoutState | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tenant_id = tenant_id
        self._layout = layout or LayoutState()
        self._is_loading = False

        self.filters = FilterState(initial_filter)
        self.selection = SelectionModel()
        self.quick_stats = QuickStatsCache(
            stats_provider,
            tenant_id=tenant_id,
            seed=initial_stats,
            clock=clock,
        )
        self.bulk_actions = BulkActionController(
            self.selection,
            self.quick_stats,
            mutations,
            tenant_id=tenant_id,
        )
        self.changed: EventHook[WorkstationSnapshot] = EventHook()

        notify = lambda _payload: self._notify()  # noqa: E731
        self._subscriptions: list[Callable[[], None]] = [
            self.filters.changed.subscribe(notify),
            self.selection.changed.subscribe(notify),
            self.quick_stats.changed.subscribe(notify),
            self.quick_stats.loading_changed.subscribe(notify),
            self.bulk_actions.changed.subscribe(notify),
        ]

    @property
    def tenant_id(self) -> str | None:
        return self._tenant_id

    @property
    def layout(self) -> LayoutState:
        return self._layout

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    # ----------------------------------------------------------------- Layout

    def set_sidebar_open(self, value: bool) -> None:
        self._set_layout(sidebar_open=value)

    def set_insights_panel_open(self, value: bool) -> None:
        self._set_layout(insights_panel_open=value)

    def set_main_content_layout(self, layout: MainContentLayout | str) -> None:
        self._set_layout(main_content_layout=MainContentLayout(layout))

    def set_loading(self, value: bool) -> None:
        if self._is_loading == value:
            return
        self._is_loading = value
        self._notify()

    # --------------------------------------------------------------- Snapshot

    def snapshot(self) -> WorkstationSnapshot:
        return WorkstationSnapshot(
            layout=self._layout,
            filter=self.filters.predicate,
            selected_ids=self.selection.ids,
            quick_stats=self.quick_stats.snapshot,
            stats_loading=self.quick_stats.loading,
            is_loading=self._is_loading,
            bulk_phase=self.bulk_actions.phase,
            bulk_action_type=self.bulk_actions.action_type,
            bulk_action_value=self.bulk_actions.action_value,
        )

    def close(self) -> None:
        while self._subscriptions:
            self._subscriptions.pop()()

    def _set_layout(self, **changes: object) -> None:
        updated = replace(self._layout, **changes)
        if updated == self._layout:
            return
        self._layout = updated
        self._notify()

    def _notify(self) -> None:
        self.changed.emit(self.snapshot())


__all__ = [
    "LayoutState",
    "MainContentLayout",
    "WorkstationSession",
    "WorkstationSnapshot",
]
