from __future__ import annotations

import math
from dataclasses import dataclass, field

from admin_workstation.data import QuickStats


REVIEW_PENDING = "Review pending approvals"
FOLLOW_UP_ONBOARDING = "Follow up on onboarding due this week"
ARCHIVE_INACTIVE = "Archive inactive users"
AUDIT_ADMINS = "Audit admin accounts"


@dataclass(frozen=True, slots=True)
class InsightsSummary:
    total_users: int
    active_rate: int
    pending_count: int
    recommended_actions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_stats(cls, stats: QuickStats | None) -> "InsightsSummary":
        if stats is None:
            return cls(total_users=0, active_rate=0, pending_count=0)
        return cls(
            total_users=stats.total_users,
            active_rate=active_rate(stats),
            pending_count=stats.pending_approvals,
            recommended_actions=recommended_actions(stats),
        )


def active_rate(stats: QuickStats) -> int:
    """Active share of total as a whole percent; the ratio is scaled before rounding halves up."""

    if not stats.total_users:
        return 0
    return math.floor(stats.active_users / stats.total_users * 100 + 0.5)


def recommended_actions(stats: QuickStats) -> tuple[str, ...]:
    actions: list[str] = []
    if stats.pending_approvals:
        actions.append(REVIEW_PENDING)
    if stats.due_this_week:
        actions.append(FOLLOW_UP_ONBOARDING)
    if stats.total_users > stats.active_users:
        actions.append(ARCHIVE_INACTIVE)
    if stats.total_users:
        actions.append(AUDIT_ADMINS)
    return tuple(actions)


__all__ = ["InsightsSummary", "active_rate", "recommended_actions"]
