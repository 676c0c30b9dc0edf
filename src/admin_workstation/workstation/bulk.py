from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum

from admin_workstation.errors import ConfigurationError
from admin_workstation.services.base import EventHook, MutationStatus, run_optimistic_mutation
from admin_workstation.services.contracts import MutationService
from admin_workstation.utils import get_logger

from .selection import SelectionModel
from .stats import QuickStatsCache


logger = get_logger(__name__)


class BulkActionPhase(StrEnum):
    IDLE = "idle"
    APPLYING = "applying"
    SETTLING = "settling"


@dataclass(frozen=True, slots=True)
class BulkActionRequest:
    action_type: str
    action_value: str
    ids: frozenset[str]


@dataclass(slots=True)
class BulkActionEvent:
    request: BulkActionRequest
    status: MutationStatus
    error: Exception | None = None


class BulkActionController:
    """Applies one action/value pair to the current selection.

    Phases run idle -> applying -> settling -> idle. Settling always clears
    the selection and refreshes quick stats once, whether or not the mutation
    succeeded or was cancelled. The pending action fields are reset on the way
    back to idle.
    """

    def __init__(
        self,
        selection: SelectionModel,
        quick_stats: QuickStatsCache,
        mutations: MutationService | None,
        *,
        tenant_id: str | None = None,
    ) -> None:
        self._selection = selection
        self._quick_stats = quick_stats
        self._mutations = mutations
        self._tenant_id = tenant_id
        self._action_type = ""
        self._action_value = ""
        self._phase = BulkActionPhase.IDLE
        self._request: BulkActionRequest | None = None

        self.events: EventHook[BulkActionEvent] = EventHook()
        self.changed: EventHook[BulkActionPhase] = EventHook()

    # ------------------------------------------------------------------ State

    @property
    def action_type(self) -> str:
        return self._action_type

    @property
    def action_value(self) -> str:
        return self._action_value

    @property
    def phase(self) -> BulkActionPhase:
        return self._phase

    @property
    def is_applying_bulk_action(self) -> bool:
        return self._phase is not BulkActionPhase.IDLE

    @property
    def request(self) -> BulkActionRequest | None:
        return self._request

    def set_action_type(self, action_type: str) -> None:
        self._action_type = action_type
        self.changed.emit(self._phase)

    def set_action_value(self, action_value: str) -> None:
        self._action_value = action_value
        self.changed.emit(self._phase)

    # ---------------------------------------------------------------- Actions

    async def apply_bulk_action(self) -> bool:
        """Run the pending action; returns ``False`` when nothing was applied."""

        if self._phase is not BulkActionPhase.IDLE:
            logger.info("Ignored bulk action while another is in flight", phase=self._phase.value)
            return False
        if not self._action_type or not self._action_value or self._selection.count() == 0:
            return False
        if self._mutations is None:
            raise ConfigurationError("No mutation service is configured")

        request = BulkActionRequest(
            action_type=self._action_type,
            action_value=self._action_value,
            ids=self._selection.ids,
        )
        mutations = self._mutations
        self._request = request
        self._set_phase(BulkActionPhase.APPLYING)
        try:
            mutation_error: BaseException | None = None
            try:
                await run_optimistic_mutation(
                    emitter=self.events,
                    event_builder=lambda status, error: BulkActionEvent(request, status, error),
                    operation=lambda: mutations.apply_bulk_action(
                        request.action_type,
                        request.action_value,
                        sorted(request.ids),
                        tenant_id=self._tenant_id,
                    ),
                )
            except (Exception, asyncio.CancelledError) as exc:  # noqa: BLE001
                mutation_error = exc

            self._set_phase(BulkActionPhase.SETTLING)
            self._selection.clear()
            try:
                await self._quick_stats.refresh()
            except Exception:
                if mutation_error is None:
                    raise
                logger.exception(
                    "Quick stats refresh failed after bulk action error",
                    action_type=request.action_type,
                )
            if mutation_error is not None:
                raise mutation_error
        finally:
            self._action_type = ""
            self._action_value = ""
            self._request = None
            self._set_phase(BulkActionPhase.IDLE)
        logger.info(
            "Bulk action settled",
            action_type=request.action_type,
            count=len(request.ids),
        )
        return True

    def _set_phase(self, phase: BulkActionPhase) -> None:
        self._phase = phase
        self.changed.emit(phase)


__all__ = [
    "BulkActionController",
    "BulkActionEvent",
    "BulkActionPhase",
    "BulkActionRequest",
]
