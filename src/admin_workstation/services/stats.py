from __future__ import annotations

from datetime import datetime
from typing import Callable

from admin_workstation.data import DirectoryUserRepository, QuickStats
from admin_workstation.services.base import EventHook, RefreshEvent, ServiceErrorEvent
from admin_workstation.utils import get_logger, utc_now


logger = get_logger(__name__)


class UserStatsService:
    """Computes quick stats for a tenant from the local directory store."""

    def __init__(
        self,
        repository: DirectoryUserRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

        self.refreshed: EventHook[RefreshEvent[QuickStats]] = EventHook()
        self.errors: EventHook[ServiceErrorEvent] = EventHook()

    async def fetch_quick_stats(self, tenant_id: str | None) -> QuickStats:
        now = self._clock()
        try:
            counts = self._repository.aggregate_counts(tenant_id=tenant_id, now=now)
            stats = QuickStats(refreshed_at=now, **counts)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to compute quick stats", tenant_id=tenant_id)
            self.errors.emit(ServiceErrorEvent(tenant_id=tenant_id, error=exc))
            raise
        logger.debug("Quick stats computed", tenant_id=tenant_id, **counts)
        self.refreshed.emit(RefreshEvent(tenant_id=tenant_id, items=stats))
        return stats


__all__ = ["UserStatsService"]
