"""Client-side workstation state: filters, selection, quick stats and bulk actions."""

from .bulk import (
    BulkActionController,
    BulkActionEvent,
    BulkActionPhase,
    BulkActionRequest,
)
from .context import WorkstationScope, use_workstation
from .controller import WorkstationController
from .filters import FilterState
from .insights import InsightsSummary
from .selection import SelectionModel
from .session import (
    LayoutState,
    MainContentLayout,
    WorkstationSession,
    WorkstationSnapshot,
)
from .stats import QuickStatsCache

__all__ = [
    "BulkActionController",
    "BulkActionEvent",
    "BulkActionPhase",
    "BulkActionRequest",
    "FilterState",
    "InsightsSummary",
    "LayoutState",
    "MainContentLayout",
    "QuickStatsCache",
    "SelectionModel",
    "WorkstationController",
    "WorkstationScope",
    "WorkstationSession",
    "WorkstationSnapshot",
    "use_workstation",
]
