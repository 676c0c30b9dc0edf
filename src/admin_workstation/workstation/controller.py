from __future__ import annotations

from collections.abc import Callable

from admin_workstation.auth import Actor
from admin_workstation.config import DEFAULT_ENTITY_TYPE
from admin_workstation.data import (
    DirectoryUser,
    FilterLogic,
    FilterPreset,
    FilterPresetDraft,
    FilterPresetScope,
    QuickStats,
)
from admin_workstation.errors import ConfigurationError
from admin_workstation.services import ServiceErrorEvent, ServiceRegistry
from admin_workstation.utils import get_logger

from .bulk import BulkActionEvent
from .insights import InsightsSummary
from .session import WorkstationSession, WorkstationSnapshot


logger = get_logger(__name__)


class WorkstationController:
    """Bridge between workstation intents and the service layer."""

    def __init__(
        self,
        session: WorkstationSession,
        services: ServiceRegistry,
        actor: Actor | None,
        *,
        entity_type: str = DEFAULT_ENTITY_TYPE,
    ) -> None:
        self._session = session
        self._services = services
        self._actor = actor
        self._entity_type = entity_type
        self._subscriptions: list[Callable[[], None]] = []

    @property
    def session(self) -> WorkstationSession:
        return self._session

    @property
    def actor(self) -> Actor | None:
        return self._actor

    # ----------------------------------------------------------------- Events

    def register_callbacks(
        self,
        *,
        snapshot: Callable[[WorkstationSnapshot], None] | None = None,
        error: Callable[[ServiceErrorEvent], None] | None = None,
        bulk: Callable[[BulkActionEvent], None] | None = None,
    ) -> None:
        if snapshot is not None:
            self._subscriptions.append(self._session.changed.subscribe(snapshot))
        if bulk is not None:
            self._subscriptions.append(self._session.bulk_actions.events.subscribe(bulk))
        if error is not None:
            for source in (
                self._services.directory,
                self._services.stats,
                self._services.mutations,
                self._services.presets,
            ):
                hook = getattr(source, "errors", None)
                if hook is not None:
                    self._subscriptions.append(hook.subscribe(error))

    def dispose(self) -> None:
        while self._subscriptions:
            unsubscribe = self._subscriptions.pop()
            unsubscribe()

    # ----------------------------------------------------------------- Queries

    def load_directory(self, *, prune_selection: bool = False) -> list[DirectoryUser]:
        """List users matching the active filter.

        The selection is left untouched unless ``prune_selection`` is set, in
        which case ids no longer listed are dropped.
        """

        directory = self._services.directory
        if directory is None:
            return []
        self._session.set_loading(True)
        try:
            users = directory.list_users(
                self._session.filters.predicate,
                tenant_id=self._session.tenant_id,
            )
        finally:
            self._session.set_loading(False)
        if prune_selection:
            self._session.selection.retain(user.id for user in users)
        return users

    def insights(self) -> InsightsSummary:
        return InsightsSummary.from_stats(self._session.quick_stats.snapshot)

    # ----------------------------------------------------------------- Actions

    async def refresh_quick_stats(self) -> QuickStats:
        return await self._session.quick_stats.refresh()

    async def apply_bulk_action(self, action_type: str, action_value: str) -> bool:
        bulk = self._session.bulk_actions
        if bulk.is_applying_bulk_action:
            logger.info("Ignored bulk action while another is in flight")
            return False
        bulk.set_action_type(action_type)
        bulk.set_action_value(action_value)
        return await bulk.apply_bulk_action()

    async def list_presets(
        self,
        scope: FilterPresetScope = FilterPresetScope.SHARED,
    ) -> list[FilterPreset]:
        store = self._require_presets()
        return await store.list_presets(
            self._actor,
            entity_type=self._entity_type,
            scope=scope,
        )

    async def save_current_filter(
        self,
        name: str,
        *,
        description: str | None = None,
        is_public: bool = False,
        logic: FilterLogic = FilterLogic.AND,
        icon: str | None = None,
        color: str | None = None,
    ) -> FilterPreset:
        store = self._require_presets()
        draft = FilterPresetDraft(
            name=name,
            description=description,
            entity_type=self._entity_type,
            filter_config=self._session.filters.predicate.to_filter_config(logic),
            is_public=is_public,
            icon=icon,
            color=color,
        )
        return await store.create_preset(self._actor, draft)

    async def apply_preset(self, preset: FilterPreset) -> None:
        self._session.filters.set_filter(preset.predicate())
        local = self._services.local_presets
        if local is not None:
            await local.mark_used(self._actor, preset.id)

    def _require_presets(self):
        if self._services.presets is None:
            raise ConfigurationError("Filter preset service is not configured")
        return self._services.presets


__all__ = ["WorkstationController"]
