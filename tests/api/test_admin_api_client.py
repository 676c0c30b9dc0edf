from __future__ import annotations

import httpx
import pytest
import respx

from admin_workstation.api import (
    AdminApiClient,
    ApiClientConfig,
    ApiTelemetryEvent,
    RemoteFilterPresetStore,
    RemoteMutationService,
    RemoteStatsProvider,
)
from admin_workstation.data import FilterPresetScope
from admin_workstation.errors import (
    ConflictError,
    NotFoundError,
    TransientFailureError,
    UnauthorizedError,
    ValidationError,
    WorkstationError,
)

from tests.factories import make_actor, make_preset_draft


BASE_URL = "https://admin.example.com"


def _client(**overrides: object) -> AdminApiClient:
    config = ApiClientConfig(base_url=BASE_URL, token="secret", **overrides)
    return AdminApiClient(config)


def _preset_payload(preset_id: str, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": preset_id,
        "tenantId": "tenant-a",
        "name": f"Preset {preset_id}",
        "entityType": "users",
        "filterConfig": {"status": "PENDING"},
        "filterLogic": "AND",
        "isPublic": False,
        "isDefault": False,
        "usageCount": 0,
        "createdBy": "admin-1",
        "createdAt": "2024-05-06T12:00:00Z",
        "updatedAt": "2024-05-06T12:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (401, UnauthorizedError),
        (400, ValidationError),
        (422, ValidationError),
        (404, NotFoundError),
        (409, ConflictError),
        (500, TransientFailureError),
        (503, TransientFailureError),
    ],
)
async def test_status_codes_map_to_errors(
    respx_mock: respx.Router,
    status_code: int,
    error_type: type[WorkstationError],
) -> None:
    respx_mock.get(f"{BASE_URL}/api/admin/users/stats").mock(
        return_value=httpx.Response(status_code, json={"error": "Request rejected"}),
    )
    client = _client()
    try:
        with pytest.raises(error_type) as excinfo:
            await client.get_json("/api/admin/users/stats")
    finally:
        await client.close()

    assert excinfo.value.message == "Request rejected"
    assert excinfo.value.status_code == status_code


@pytest.mark.asyncio
async def test_tenantless_rejection_maps_to_unauthorized(respx_mock: respx.Router) -> None:
    respx_mock.get(f"{BASE_URL}/api/admin/filter-presets").mock(
        return_value=httpx.Response(400, json={"error": "No tenant found"}),
    )
    client = _client()
    try:
        with pytest.raises(UnauthorizedError) as excinfo:
            await client.get_json("/api/admin/filter-presets")
    finally:
        await client.close()

    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_transport_errors_become_transient(respx_mock: respx.Router) -> None:
    respx_mock.get(f"{BASE_URL}/api/admin/users/stats").mock(
        side_effect=httpx.ConnectError("refused"),
    )
    client = _client()
    try:
        with pytest.raises(TransientFailureError) as excinfo:
            await client.get_json("/api/admin/users/stats")
    finally:
        await client.close()

    assert isinstance(excinfo.value.inner_error, httpx.ConnectError)
    assert excinfo.value.is_retriable is True


@pytest.mark.asyncio
async def test_requests_carry_bearer_token_and_report_telemetry(
    respx_mock: respx.Router,
) -> None:
    route = respx_mock.get(f"{BASE_URL}/api/admin/users/stats").mock(
        return_value=httpx.Response(
            200,
            json={
                "totalUsers": 10,
                "activeUsers": 8,
                "pendingApprovals": 2,
                "inProgressWorkflows": 1,
                "dueThisWeek": 1,
            },
        ),
    )
    events: list[ApiTelemetryEvent] = []
    client = _client(telemetry_callback=events.append)
    try:
        stats = await RemoteStatsProvider(client).fetch_quick_stats("tenant-a")
    finally:
        await client.close()

    assert route.called
    assert route.calls.last.request.headers["Authorization"] == "Bearer secret"
    assert stats.total_users == 10
    assert stats.pending_approvals == 2
    assert events and events[0].success is True
    assert events[0].url == f"{BASE_URL}/api/admin/users/stats"


@pytest.mark.asyncio
async def test_remote_bulk_action_posts_payload(respx_mock: respx.Router) -> None:
    route = respx_mock.post(f"{BASE_URL}/api/admin/users/bulk").mock(
        return_value=httpx.Response(200, json={"success": True, "updated": 2}),
    )
    client = _client()
    try:
        result = await RemoteMutationService(client).apply_bulk_action(
            "archive",
            "true",
            ["u1", "u2", "u1"],
            tenant_id="tenant-a",
        )
    finally:
        await client.close()

    assert result == {"success": True, "updated": 2}
    body = route.calls.last.request.read()
    assert b'"actionType":"archive"' in body.replace(b" ", b"")
    assert b'"ids":["u1","u2"]' in body.replace(b" ", b"")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("scope", "expected_params"),
    [
        (FilterPresetScope.SHARED, {"entityType": "users"}),
        (FilterPresetScope.PUBLIC, {"entityType": "users", "isPublic": "true"}),
        (FilterPresetScope.MINE, {"entityType": "users", "includeShared": "false"}),
    ],
)
async def test_remote_presets_listing_maps_scope(
    respx_mock: respx.Router,
    scope: FilterPresetScope,
    expected_params: dict[str, str],
) -> None:
    route = respx_mock.get(f"{BASE_URL}/api/admin/filter-presets").mock(
        return_value=httpx.Response(
            200,
            json={
                "success": True,
                "presets": [_preset_payload("p1"), {"id": "broken"}],
            },
        ),
    )
    client = _client()
    store = RemoteFilterPresetStore(client)
    try:
        presets = await store.list_presets(make_actor(), scope=scope)
    finally:
        await client.close()

    assert dict(route.calls.last.request.url.params) == expected_params
    assert [preset.id for preset in presets] == ["p1"]
    assert store.validator.issues()[0].identifier == "broken"


@pytest.mark.asyncio
async def test_remote_preset_create_surfaces_conflict(respx_mock: respx.Router) -> None:
    respx_mock.post(f"{BASE_URL}/api/admin/filter-presets").mock(
        side_effect=[
            httpx.Response(201, json={"success": True, "preset": _preset_payload("p1")}),
            httpx.Response(409, json={"error": "Preset with this name already exists"}),
        ],
    )
    client = _client()
    store = RemoteFilterPresetStore(client)
    try:
        created = await store.create_preset(make_actor(), make_preset_draft("My View"))
        with pytest.raises(ConflictError, match="already exists"):
            await store.create_preset(make_actor(), make_preset_draft("My View"))
    finally:
        await client.close()

    assert created.id == "p1"


@pytest.mark.asyncio
async def test_remote_store_rejects_anonymous_actor_before_request(
    respx_mock: respx.Router,
) -> None:
    client = _client()
    try:
        with pytest.raises(UnauthorizedError):
            await RemoteFilterPresetStore(client).list_presets(None)
    finally:
        await client.close()

    assert respx_mock.calls.call_count == 0
