from __future__ import annotations

import asyncio
from typing import Awaitable

from PySide6.QtCore import QObject, Signal

from admin_workstation.data import FilterPredicate, FilterPreset, FilterPresetScope
from admin_workstation.utils import get_logger
from admin_workstation.utils.asyncio import AsyncBridge
from admin_workstation.utils.errors import describe_exception
from admin_workstation.workstation import (
    BulkActionEvent,
    MainContentLayout,
    WorkstationController,
    WorkstationSnapshot,
)


logger = get_logger(__name__)


class WorkstationBridge(QObject):
    """Expose a workstation controller to Qt widgets through signals."""

    snapshot_changed = Signal(object)
    error_raised = Signal(object)
    bulk_action_event = Signal(object)
    bulk_action_settled = Signal(bool)
    presets_loaded = Signal(object)
    preset_saved = Signal(object)

    def __init__(
        self,
        controller: WorkstationController,
        *,
        async_bridge: AsyncBridge | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._async = async_bridge or AsyncBridge()
        controller.register_callbacks(
            snapshot=self._on_snapshot,
            bulk=self._on_bulk_event,
        )

    @property
    def controller(self) -> WorkstationController:
        return self._controller

    def snapshot(self) -> WorkstationSnapshot:
        return self._controller.session.snapshot()

    # ---------------------------------------------------------------- Intents

    def toggle_selection(self, user_id: str) -> None:
        self._controller.session.selection.toggle(user_id)

    def select_all(self, ids: list[str]) -> None:
        self._controller.session.selection.select_all(ids)

    def clear_selection(self) -> None:
        self._controller.session.selection.clear()

    def set_filter(self, predicate: FilterPredicate) -> None:
        self._controller.session.filters.set_filter(predicate)

    def set_sidebar_open(self, value: bool) -> None:
        self._controller.session.set_sidebar_open(value)

    def set_insights_panel_open(self, value: bool) -> None:
        self._controller.session.set_insights_panel_open(value)

    def set_main_content_layout(self, layout: MainContentLayout | str) -> None:
        self._controller.session.set_main_content_layout(layout)

    def refresh_quick_stats(self) -> asyncio.Future[None]:
        return self._run(self._controller.refresh_quick_stats())

    def apply_bulk_action(self, action_type: str, action_value: str) -> asyncio.Future[None]:
        return self._run(self._apply_bulk_action(action_type, action_value))

    def load_presets(
        self,
        scope: FilterPresetScope = FilterPresetScope.SHARED,
    ) -> asyncio.Future[None]:
        return self._run(self._load_presets(scope))

    def save_current_filter(self, name: str, *, is_public: bool = False) -> asyncio.Future[None]:
        return self._run(self._save_current_filter(name, is_public))

    def apply_preset(self, preset: FilterPreset) -> asyncio.Future[None]:
        return self._run(self._controller.apply_preset(preset))

    def dispose(self) -> None:
        self._controller.dispose()

    # -------------------------------------------------------------- Coroutines

    async def _apply_bulk_action(self, action_type: str, action_value: str) -> None:
        applied = await self._controller.apply_bulk_action(action_type, action_value)
        self.bulk_action_settled.emit(applied)

    async def _load_presets(self, scope: FilterPresetScope) -> None:
        presets = await self._controller.list_presets(scope)
        self.presets_loaded.emit(presets)

    async def _save_current_filter(self, name: str, is_public: bool) -> None:
        preset = await self._controller.save_current_filter(name, is_public=is_public)
        self.preset_saved.emit(preset)

    def _run(self, coro: Awaitable[object]) -> asyncio.Future[None]:
        return self._async.run_coroutine(self._guard(coro))

    async def _guard(self, coro: Awaitable[object]) -> None:
        try:
            await coro
        except Exception as exc:  # noqa: BLE001
            logger.warning("Workstation intent failed", error=str(exc))
            self.error_raised.emit(describe_exception(exc))

    # ---------------------------------------------------------------- Events

    def _on_snapshot(self, snapshot: WorkstationSnapshot) -> None:
        self.snapshot_changed.emit(snapshot)

    def _on_bulk_event(self, event: BulkActionEvent) -> None:
        self.bulk_action_event.emit(event)


__all__ = ["WorkstationBridge"]
