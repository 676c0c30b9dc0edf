from __future__ import annotations

from datetime import datetime
from typing import Callable

from admin_workstation.data import QuickStats
from admin_workstation.services.base import EventHook
from admin_workstation.services.contracts import StatsProvider
from admin_workstation.utils import get_logger, utc_now


logger = get_logger(__name__)


class QuickStatsCache:
    """Last known quick stats for the session's tenant.

    The snapshot is only ever replaced by :meth:`refresh`. A failed refresh
    keeps the previous snapshot and re-raises the provider error.

    Overlapping refreshes keep ``loading`` set until the last one settles, and
    a response is dropped when a later-issued refresh has already landed.
    """

    def __init__(
        self,
        provider: StatsProvider | None = None,
        *,
        tenant_id: str | None = None,
        seed: QuickStats | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._provider = provider
        self._tenant_id = tenant_id
        self._clock = clock
        self._snapshot = seed if seed is not None else QuickStats.zero(clock())
        self._loading = False
        self._in_flight = 0
        self._issued = 0
        self._applied = 0
        self.changed: EventHook[QuickStats] = EventHook()
        self.loading_changed: EventHook[bool] = EventHook()

    @property
    def snapshot(self) -> QuickStats:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._loading

    async def refresh(self) -> QuickStats:
        self._issued += 1
        generation = self._issued
        self._in_flight += 1
        self._set_loading(True)
        try:
            if self._provider is None:
                fresh = self._snapshot.model_copy(update={"refreshed_at": self._clock()})
            else:
                fetched = await self._provider.fetch_quick_stats(self._tenant_id)
                fresh = fetched.model_copy(update={"refreshed_at": self._clock()})
            superseded = generation < self._applied
            if not superseded:
                self._applied = generation
                self._snapshot = fresh
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._set_loading(False)
        if superseded:
            logger.debug(
                "Dropped superseded quick stats response",
                tenant_id=self._tenant_id,
                generation=generation,
            )
            return self._snapshot
        logger.debug(
            "Quick stats refreshed",
            tenant_id=self._tenant_id,
            total=fresh.total_users,
        )
        self.changed.emit(fresh)
        return fresh

    def _set_loading(self, value: bool) -> None:
        if self._loading == value:
            return
        self._loading = value
        self.loading_changed.emit(value)


__all__ = ["QuickStatsCache"]
