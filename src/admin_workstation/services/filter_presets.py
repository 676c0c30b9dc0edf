from __future__ import annotations

from datetime import datetime
from typing import Callable
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from admin_workstation.auth import Actor, TenantActor, require_actor
from admin_workstation.config import DEFAULT_ENTITY_TYPE
from admin_workstation.data import (
    FilterPreset,
    FilterPresetDraft,
    FilterPresetRepository,
    FilterPresetScope,
)
from admin_workstation.errors import ConflictError, NotFoundError, ValidationError
from admin_workstation.services.base import EventHook, RefreshEvent, ServiceErrorEvent
from admin_workstation.utils import get_logger, utc_now


logger = get_logger(__name__)

DUPLICATE_PRESET_MESSAGE = "Preset with this name already exists"
MISSING_FIELDS_MESSAGE = "Missing required fields: name, filterConfig"


class FilterPresetService:
    """Saved filter presets scoped to the caller's tenant.

    A preset name is unique per creator inside a tenant. Shared listings
    return the caller's own presets plus every public preset of the tenant.
    """

    def __init__(
        self,
        repository: FilterPresetRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

        self.refreshed: EventHook[RefreshEvent[list[FilterPreset]]] = EventHook()
        self.errors: EventHook[ServiceErrorEvent] = EventHook()

    # ------------------------------------------------------------------ Queries

    async def list_presets(
        self,
        actor: Actor | None,
        *,
        entity_type: str = DEFAULT_ENTITY_TYPE,
        scope: FilterPresetScope = FilterPresetScope.SHARED,
    ) -> list[FilterPreset]:
        caller = require_actor(actor)
        presets = self._repository.list_visible(
            tenant_id=caller.tenant_id,
            user_id=caller.user_id,
            entity_type=entity_type,
            scope=FilterPresetScope(scope),
        )
        logger.debug(
            "Listed filter presets",
            tenant_id=caller.tenant_id,
            scope=str(scope),
            count=len(presets),
        )
        self.refreshed.emit(RefreshEvent(tenant_id=caller.tenant_id, items=presets))
        return presets

    async def get_preset(self, actor: Actor | None, preset_id: str) -> FilterPreset:
        return self._readable_preset(require_actor(actor), preset_id)

    # ----------------------------------------------------------------- Actions

    async def create_preset(
        self,
        actor: Actor | None,
        draft: FilterPresetDraft,
    ) -> FilterPreset:
        caller = require_actor(actor)
        name = draft.name.strip()
        if not name or draft.filter_config is None:
            raise ValidationError(MISSING_FIELDS_MESSAGE, fields=("name", "filterConfig"))

        if self._repository.exists_named(
            name,
            tenant_id=caller.tenant_id,
            created_by=caller.user_id,
        ):
            logger.info(
                "Rejected duplicate filter preset",
                tenant_id=caller.tenant_id,
                user_id=caller.user_id,
            )
            raise ConflictError(DUPLICATE_PRESET_MESSAGE)

        now = self._clock()
        preset = FilterPreset(
            id=uuid4().hex,
            tenant_id=caller.tenant_id,
            name=name,
            description=draft.description or None,
            entity_type=draft.entity_type or DEFAULT_ENTITY_TYPE,
            filter_config=draft.filter_config,
            filter_logic=draft.filter_logic,
            is_public=draft.is_public,
            icon=draft.icon or None,
            color=draft.color or None,
            created_by=caller.user_id,
            created_at=now,
            updated_at=now,
        )
        try:
            stored = self._repository.add(preset, tenant_id=caller.tenant_id)
        except IntegrityError as exc:
            raise ConflictError(DUPLICATE_PRESET_MESSAGE) from exc
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to save filter preset", tenant_id=caller.tenant_id)
            self.errors.emit(ServiceErrorEvent(tenant_id=caller.tenant_id, error=exc))
            raise
        logger.info(
            "Filter preset created",
            tenant_id=caller.tenant_id,
            preset_id=stored.id,
            public=stored.is_public,
        )
        return stored

    async def mark_used(self, actor: Actor | None, preset_id: str) -> FilterPreset:
        """Bump the usage counter of a preset the caller can read."""

        caller = require_actor(actor)
        self._readable_preset(caller, preset_id)
        updated = self._repository.record_usage(
            preset_id,
            tenant_id=caller.tenant_id,
            used_at=self._clock(),
        )
        if updated is None:
            raise NotFoundError("Preset not found")
        return updated

    async def delete_preset(self, actor: Actor | None, preset_id: str) -> None:
        caller = require_actor(actor)
        preset = self._repository.get(preset_id, tenant_id=caller.tenant_id)
        if preset is None or preset.created_by != caller.user_id:
            raise NotFoundError("Preset not found")
        self._repository.delete([preset_id], tenant_id=caller.tenant_id)
        logger.info("Filter preset deleted", tenant_id=caller.tenant_id, preset_id=preset_id)

    def _readable_preset(self, caller: TenantActor, preset_id: str) -> FilterPreset:
        preset = self._repository.get(preset_id, tenant_id=caller.tenant_id)
        if preset is None or not preset.readable_by(caller.user_id):
            raise NotFoundError("Preset not found")
        return preset


__all__ = [
    "FilterPresetService",
    "DUPLICATE_PRESET_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
]
