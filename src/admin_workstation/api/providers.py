from __future__ import annotations

from typing import Any, Sequence

from admin_workstation.auth import Actor, require_actor
from admin_workstation.config import DEFAULT_ENTITY_TYPE
from admin_workstation.data import (
    FilterPreset,
    FilterPresetDraft,
    FilterPresetScope,
    PayloadValidator,
    QuickStats,
)
from admin_workstation.errors import TransientFailureError
from admin_workstation.services.base import EventHook, ServiceErrorEvent
from admin_workstation.utils import get_logger, utc_now

from .client import AdminApiClient


logger = get_logger(__name__)

STATS_PATH = "/api/admin/users/stats"
BULK_PATH = "/api/admin/users/bulk"
FILTER_PRESETS_PATH = "/api/admin/filter-presets"


def _scope_params(entity_type: str, scope: FilterPresetScope) -> dict[str, str]:
    params = {"entityType": entity_type}
    match FilterPresetScope(scope):
        case FilterPresetScope.PUBLIC:
            params["isPublic"] = "true"
        case FilterPresetScope.MINE:
            params["includeShared"] = "false"
        case _:
            pass
    return params


class RemoteStatsProvider:
    """Stats provider backed by ``GET /api/admin/users/stats``."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client
        self.errors: EventHook[ServiceErrorEvent] = EventHook()

    async def fetch_quick_stats(self, tenant_id: str | None) -> QuickStats:
        try:
            body = await self._client.get_json(STATS_PATH)
            payload = dict(body.get("stats", body)) if isinstance(body, dict) else {}
            payload.setdefault("refreshedAt", utc_now().isoformat())
            stats = QuickStats.from_api(payload)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to fetch quick stats", tenant_id=tenant_id)
            self.errors.emit(ServiceErrorEvent(tenant_id=tenant_id, error=exc))
            raise
        return stats


class RemoteMutationService:
    """Bulk mutation service backed by ``POST /api/admin/users/bulk``."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client
        self.errors: EventHook[ServiceErrorEvent] = EventHook()

    async def apply_bulk_action(
        self,
        action_type: str,
        action_value: str,
        ids: Sequence[str],
        *,
        tenant_id: str | None = None,
    ) -> Any:
        payload = {
            "actionType": action_type,
            "actionValue": action_value,
            "ids": list(dict.fromkeys(ids)),
        }
        try:
            result = await self._client.post_json(BULK_PATH, payload)
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "Remote bulk action failed",
                tenant_id=tenant_id,
                action_type=action_type,
                count=len(payload["ids"]),
            )
            self.errors.emit(ServiceErrorEvent(tenant_id=tenant_id, error=exc))
            raise
        logger.info(
            "Remote bulk action applied",
            tenant_id=tenant_id,
            action_type=action_type,
            count=len(payload["ids"]),
        )
        return result


class RemoteFilterPresetStore:
    """Filter preset CRUD backed by ``/api/admin/filter-presets``.

    The server resolves the caller from the bearer token. The actor is still
    checked locally so anonymous sessions fail before any request is sent.
    """

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client
        self._validator = PayloadValidator("filter_presets")

    @property
    def validator(self) -> PayloadValidator:
        return self._validator

    async def list_presets(
        self,
        actor: Actor | None,
        *,
        entity_type: str = DEFAULT_ENTITY_TYPE,
        scope: FilterPresetScope = FilterPresetScope.SHARED,
    ) -> list[FilterPreset]:
        require_actor(actor)
        body = await self._client.get_json(
            FILTER_PRESETS_PATH,
            params=_scope_params(entity_type, scope),
        )
        items = body.get("presets", []) if isinstance(body, dict) else []
        return self._validator.parse_many(FilterPreset, items)

    async def create_preset(
        self,
        actor: Actor | None,
        draft: FilterPresetDraft,
    ) -> FilterPreset:
        require_actor(actor)
        body = await self._client.post_json(FILTER_PRESETS_PATH, draft.to_api())
        payload = body.get("preset", body) if isinstance(body, dict) else None
        preset = (
            self._validator.parse(FilterPreset, payload)
            if isinstance(payload, dict)
            else None
        )
        if preset is None:
            raise TransientFailureError("Admin API returned an invalid preset payload")
        return preset


__all__ = [
    "RemoteFilterPresetStore",
    "RemoteMutationService",
    "RemoteStatsProvider",
]
