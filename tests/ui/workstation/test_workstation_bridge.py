from __future__ import annotations

import pytest

from admin_workstation.bootstrap import build_local_registry, build_workstation
from admin_workstation.ui.workstation import WorkstationBridge
from admin_workstation.utils.errors import ErrorDescriptor
from admin_workstation.workstation import MainContentLayout, WorkstationSnapshot

from tests.factories import TENANT_ID, make_actor, make_user


@pytest.mark.asyncio
async def test_bridge_reemits_snapshots(qt_app, database) -> None:
    controller = build_workstation(build_local_registry(database), make_actor())
    bridge = WorkstationBridge(controller)
    snapshots: list[WorkstationSnapshot] = []
    bridge.snapshot_changed.connect(snapshots.append)

    bridge.toggle_selection("u1")
    bridge.set_main_content_layout(MainContentLayout.FULL)

    assert snapshots[0].selected_ids == frozenset({"u1"})
    assert snapshots[-1].layout.main_content_layout is MainContentLayout.FULL
    bridge.dispose()


@pytest.mark.asyncio
async def test_bulk_action_settles_through_bridge(qt_app, database) -> None:
    registry = build_local_registry(database)
    registry.directory.import_users([make_user("u1"), make_user("u2")], tenant_id=TENANT_ID)
    controller = build_workstation(registry, make_actor())
    bridge = WorkstationBridge(controller)
    settled: list[bool] = []
    bridge.bulk_action_settled.connect(settled.append)
    bridge.select_all(["u1", "u2"])

    await bridge.apply_bulk_action("status", "SUSPENDED")

    assert settled == [True]
    assert bridge.snapshot().selection_count == 0
    assert bridge.snapshot().quick_stats.active_users == 0
    bridge.dispose()


@pytest.mark.asyncio
async def test_failed_intent_emits_error_descriptor(qt_app, database) -> None:
    controller = build_workstation(build_local_registry(database), None)
    bridge = WorkstationBridge(controller)
    errors: list[ErrorDescriptor] = []
    bridge.error_raised.connect(errors.append)

    await bridge.save_current_filter("My View")

    assert len(errors) == 1
    assert errors[0].headline == "You are not signed in to a tenant."
    bridge.dispose()
