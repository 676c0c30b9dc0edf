from __future__ import annotations

import pytest

from admin_workstation.data import FilterPredicate, Role
from admin_workstation.workstation import (
    BulkActionPhase,
    MainContentLayout,
    WorkstationSession,
    WorkstationSnapshot,
)

from tests.factories import (
    FIXED_NOW,
    RecordingMutationService,
    RecordingStatsProvider,
    make_stats,
)


def test_defaults_open_both_panels_in_split_layout() -> None:
    session = WorkstationSession(clock=lambda: FIXED_NOW)

    snapshot = session.snapshot()

    assert snapshot.layout.sidebar_open is True
    assert snapshot.layout.insights_panel_open is True
    assert snapshot.layout.main_content_layout is MainContentLayout.SPLIT
    assert snapshot.filter.is_default
    assert snapshot.selected_ids == frozenset()
    assert snapshot.quick_stats.refreshed_at == FIXED_NOW
    assert snapshot.bulk_phase is BulkActionPhase.IDLE
    assert snapshot.is_loading is False


def test_layout_setters_emit_snapshots() -> None:
    session = WorkstationSession()
    snapshots: list[WorkstationSnapshot] = []
    session.changed.subscribe(snapshots.append)

    session.set_sidebar_open(False)
    session.set_insights_panel_open(False)
    session.set_main_content_layout("full")
    session.set_main_content_layout(MainContentLayout.FULL)

    assert len(snapshots) == 3
    layout = session.layout
    assert (layout.sidebar_open, layout.insights_panel_open) == (False, False)
    assert layout.main_content_layout is MainContentLayout.FULL


def test_sub_components_are_exposed_and_reflected_in_snapshot() -> None:
    session = WorkstationSession()
    snapshots: list[WorkstationSnapshot] = []
    session.changed.subscribe(snapshots.append)

    session.selection.select_all(["u1", "u2"])
    session.filters.set_filter(FilterPredicate(role=Role.ADMIN))
    session.set_loading(True)

    latest = snapshots[-1]
    assert latest.selected_ids == frozenset({"u1", "u2"})
    assert latest.selection_count == 2
    assert latest.filter.role is Role.ADMIN
    assert latest.is_loading is True


def test_filter_change_does_not_prune_selection() -> None:
    session = WorkstationSession()
    session.selection.select_all(["u1", "u2"])

    session.filters.update(search="nobody")

    assert session.selection.ids == frozenset({"u1", "u2"})


@pytest.mark.asyncio
async def test_bulk_action_through_session_refreshes_stats() -> None:
    provider = RecordingStatsProvider(make_stats(total=3, active=2))
    mutations = RecordingMutationService()
    session = WorkstationSession(
        tenant_id="tenant-a",
        stats_provider=provider,
        mutations=mutations,
    )
    session.selection.select_all(["u1"])
    session.bulk_actions.set_action_type("archive")
    session.bulk_actions.set_action_value("true")

    await session.bulk_actions.apply_bulk_action()

    snapshot = session.snapshot()
    assert snapshot.selected_ids == frozenset()
    assert snapshot.quick_stats.total_users == 3
    assert snapshot.is_applying_bulk_action is False
    assert mutations.calls[0][3] == "tenant-a"


def test_close_detaches_subscriptions() -> None:
    session = WorkstationSession()
    snapshots: list[WorkstationSnapshot] = []
    session.changed.subscribe(snapshots.append)

    session.close()
    session.selection.toggle("u1")

    assert snapshots == []
