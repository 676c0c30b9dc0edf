from __future__ import annotations

from datetime import datetime

from pydantic import Field, NonNegativeInt, model_validator

from .common import DomainModel


class QuickStats(DomainModel):
    """Aggregate directory counts shown on the workstation header."""

    total_users: NonNegativeInt = Field(default=0, alias="totalUsers")
    active_users: NonNegativeInt = Field(default=0, alias="activeUsers")
    pending_approvals: NonNegativeInt = Field(default=0, alias="pendingApprovals")
    in_progress_workflows: NonNegativeInt = Field(default=0, alias="inProgressWorkflows")
    due_this_week: NonNegativeInt = Field(default=0, alias="dueThisWeek")
    refreshed_at: datetime = Field(alias="refreshedAt")

    @model_validator(mode="after")
    def _active_within_total(self) -> "QuickStats":
        if self.active_users > self.total_users:
            raise ValueError("activeUsers cannot exceed totalUsers")
        return self

    @classmethod
    def zero(cls, refreshed_at: datetime) -> "QuickStats":
        return cls(refreshed_at=refreshed_at)


__all__ = ["QuickStats"]
