from __future__ import annotations

import pytest

from admin_workstation.bootstrap import build_local_registry, build_workstation
from admin_workstation.data import FilterPredicate, FilterPresetScope, Status
from admin_workstation.errors import ConflictError

from tests.factories import TENANT_ID, make_actor, make_user


def _seed(registry) -> None:
    registry.directory.import_users(
        [
            make_user("u1", name="Alice", status=Status.PENDING),
            make_user("u2", name="Bob"),
            make_user("u3", name="Carol"),
        ],
        tenant_id=TENANT_ID,
    )


def test_load_directory_keeps_stale_selection_by_default(database) -> None:
    registry = build_local_registry(database)
    _seed(registry)
    controller = build_workstation(registry, make_actor())
    controller.session.selection.select_all(["u1", "u2"])
    controller.session.filters.set_filter(FilterPredicate(search="carol"))

    users = controller.load_directory()

    assert [user.id for user in users] == ["u3"]
    assert controller.session.selection.ids == frozenset({"u1", "u2"})
    assert controller.session.is_loading is False


def test_load_directory_can_prune_selection(database) -> None:
    registry = build_local_registry(database)
    _seed(registry)
    controller = build_workstation(registry, make_actor())
    controller.session.selection.select_all(["u1", "u3"])
    controller.session.filters.set_filter(FilterPredicate(search="carol"))

    controller.load_directory(prune_selection=True)

    assert controller.session.selection.ids == frozenset({"u3"})


@pytest.mark.asyncio
async def test_bulk_archive_updates_store_and_stats(database) -> None:
    registry = build_local_registry(database)
    _seed(registry)
    controller = build_workstation(registry, make_actor())
    await controller.refresh_quick_stats()
    assert controller.session.quick_stats.snapshot.total_users == 3
    controller.session.selection.select_all(["u1", "u2"])

    applied = await controller.apply_bulk_action("archive", "true")

    assert applied is True
    assert [user.id for user in controller.load_directory()] == ["u3"]
    assert controller.session.selection.count() == 0
    assert controller.session.quick_stats.snapshot.total_users == 1
    assert controller.insights().pending_count == 0


@pytest.mark.asyncio
async def test_save_and_apply_preset_round_trip(database) -> None:
    registry = build_local_registry(database)
    controller = build_workstation(registry, make_actor())
    controller.session.filters.update(status="PENDING", search="ali")

    preset = await controller.save_current_filter("Pending approvals")
    controller.session.filters.reset()
    await controller.apply_preset(preset)

    assert controller.session.filters.predicate.status is Status.PENDING
    assert controller.session.filters.predicate.search == "ali"
    presets = await controller.list_presets(FilterPresetScope.MINE)
    assert [item.usage_count for item in presets] == [1]

    with pytest.raises(ConflictError):
        await controller.save_current_filter("Pending approvals")
