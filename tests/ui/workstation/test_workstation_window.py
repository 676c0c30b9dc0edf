from __future__ import annotations

import asyncio

import pytest

from admin_workstation.bootstrap import build_local_registry, build_workstation
from admin_workstation.data import Status
from admin_workstation.ui.workstation import WorkstationBridge, WorkstationWindow

from tests.factories import TENANT_ID, RecordingStatsProvider, make_actor, make_user


@pytest.mark.asyncio
async def test_settled_bulk_action_reloads_directory_without_extra_stats_refresh(
    qt_app,
    database,
) -> None:
    registry = build_local_registry(database)
    registry.directory.import_users([make_user("u1"), make_user("u2")], tenant_id=TENANT_ID)
    stats = RecordingStatsProvider()
    registry.stats = stats
    bridge = WorkstationBridge(build_workstation(registry, make_actor()))
    window = WorkstationWindow(bridge)
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert stats.calls == [TENANT_ID]

    bridge.select_all(["u1", "u2"])
    await bridge.apply_bulk_action("status", "SUSPENDED")
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert stats.calls == [TENANT_ID, TENANT_ID]
    model = window.centralWidget().model()
    assert model.rowCount() == 2
    assert {user.status for user in model.users()} == {Status.SUSPENDED}
    window.close()
    bridge.dispose()
