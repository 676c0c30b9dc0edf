from __future__ import annotations

from datetime import timedelta

import pytest

from admin_workstation.data import FilterLogic, FilterPresetRepository, FilterPresetScope
from admin_workstation.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from admin_workstation.services import FilterPresetService
from admin_workstation.services.filter_presets import (
    DUPLICATE_PRESET_MESSAGE,
    MISSING_FIELDS_MESSAGE,
)

from tests.factories import FIXED_NOW, make_actor, make_preset_draft


def _service(database, clock=lambda: FIXED_NOW) -> FilterPresetService:
    return FilterPresetService(FilterPresetRepository(database), clock=clock)


@pytest.mark.asyncio
async def test_duplicate_name_for_same_creator_conflicts(database) -> None:
    service = _service(database)
    actor = make_actor("admin-1")
    await service.create_preset(actor, make_preset_draft("My View"))

    with pytest.raises(ConflictError, match=DUPLICATE_PRESET_MESSAGE):
        await service.create_preset(actor, make_preset_draft("My View"))

    other = await service.create_preset(make_actor("admin-2"), make_preset_draft("My View"))
    assert other.created_by == "admin-2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "draft_kwargs",
    [
        {"name": ""},
        {"name": "   "},
    ],
)
async def test_create_requires_name(database, draft_kwargs) -> None:
    service = _service(database)

    with pytest.raises(ValidationError, match=MISSING_FIELDS_MESSAGE):
        await service.create_preset(make_actor(), make_preset_draft(**draft_kwargs))


@pytest.mark.asyncio
async def test_create_requires_filter_config(database) -> None:
    from admin_workstation.data import FilterPresetDraft

    service = _service(database)

    with pytest.raises(ValidationError) as excinfo:
        await service.create_preset(make_actor(), FilterPresetDraft(name="Empty"))

    assert excinfo.value.fields == ("name", "filterConfig")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("actor", "message"),
    [
        (None, "Unauthorized"),
        (make_actor(tenant_id=None), "No tenant found"),
    ],
)
async def test_requires_authenticated_tenant_actor(database, actor, message) -> None:
    service = _service(database)

    with pytest.raises(UnauthorizedError, match=message):
        await service.list_presets(actor)
    with pytest.raises(UnauthorizedError, match=message):
        await service.create_preset(actor, make_preset_draft())


@pytest.mark.asyncio
async def test_create_copies_logic_from_filter_config(database) -> None:
    service = _service(database)

    preset = await service.create_preset(
        make_actor(),
        make_preset_draft(filter_config={"role": "ADMIN", "logic": "OR"}, icon=""),
    )

    assert preset.filter_logic is FilterLogic.OR
    assert preset.icon is None
    assert preset.tenant_id == "tenant-a"
    assert preset.usage_count == 0


@pytest.mark.asyncio
async def test_list_scopes_and_tenant_isolation(database) -> None:
    service = _service(database)
    mine_private = await service.create_preset(make_actor("admin-1"), make_preset_draft("Mine"))
    mine_public = await service.create_preset(
        make_actor("admin-1"),
        make_preset_draft("Mine public", is_public=True),
    )
    theirs_public = await service.create_preset(
        make_actor("admin-2"),
        make_preset_draft("Theirs public", is_public=True),
    )
    await service.create_preset(make_actor("admin-2"), make_preset_draft("Theirs private"))
    await service.create_preset(
        make_actor("admin-1", tenant_id="tenant-b"),
        make_preset_draft("Other tenant", is_public=True),
    )
    actor = make_actor("admin-1")

    mine = await service.list_presets(actor, scope=FilterPresetScope.MINE)
    public = await service.list_presets(actor, scope=FilterPresetScope.PUBLIC)
    shared = await service.list_presets(actor)

    assert {preset.id for preset in mine} == {mine_private.id, mine_public.id}
    assert {preset.id for preset in public} == {mine_public.id, theirs_public.id}
    assert {preset.id for preset in shared} == {
        mine_private.id,
        mine_public.id,
        theirs_public.id,
    }


@pytest.mark.asyncio
async def test_list_orders_by_usage_then_recency(database) -> None:
    times = iter(FIXED_NOW + timedelta(minutes=offset) for offset in range(10))
    service = _service(database, clock=lambda: next(times))
    actor = make_actor()
    older = await service.create_preset(actor, make_preset_draft("Older"))
    newer = await service.create_preset(actor, make_preset_draft("Newer"))
    popular = await service.create_preset(actor, make_preset_draft("Popular"))
    await service.mark_used(actor, popular.id)

    ordered = await service.list_presets(actor)

    assert [preset.id for preset in ordered] == [popular.id, newer.id, older.id]


@pytest.mark.asyncio
async def test_private_preset_is_hidden_from_other_users(database) -> None:
    service = _service(database)
    preset = await service.create_preset(make_actor("admin-1"), make_preset_draft())

    with pytest.raises(NotFoundError):
        await service.get_preset(make_actor("admin-2"), preset.id)

    fetched = await service.get_preset(make_actor("admin-1"), preset.id)
    assert fetched.id == preset.id


@pytest.mark.asyncio
async def test_mark_used_increments_counter(database) -> None:
    service = _service(database)
    actor = make_actor()
    preset = await service.create_preset(actor, make_preset_draft())

    await service.mark_used(actor, preset.id)
    updated = await service.mark_used(actor, preset.id)

    assert updated.usage_count == 2
    assert updated.last_used_at == FIXED_NOW


@pytest.mark.asyncio
async def test_delete_only_by_creator(database) -> None:
    service = _service(database)
    preset = await service.create_preset(make_actor("admin-1"), make_preset_draft(is_public=True))

    with pytest.raises(NotFoundError):
        await service.delete_preset(make_actor("admin-2"), preset.id)
    await service.delete_preset(make_actor("admin-1"), preset.id)

    assert await service.list_presets(make_actor("admin-1")) == []
