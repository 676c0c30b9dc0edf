from __future__ import annotations

import re
from datetime import datetime
from enum import StrEnum

from pydantic import Field, field_validator

from .common import DomainModel, TimestampedResource
from .filters import Role, Status


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class OnboardingState(StrEnum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class DirectoryUser(TimestampedResource):
    """User row shown in the workstation directory."""

    name: str
    email: str
    role: Role = Role.TEAM_MEMBER
    status: Status = Status.ACTIVE
    department: str | None = None
    archived: bool = False
    onboarding_state: OnboardingState = Field(
        default=OnboardingState.NOT_STARTED,
        alias="onboardingState",
    )
    onboarding_due_at: datetime | None = Field(default=None, alias="onboardingDueAt")


class TeamMemberStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"


class _TeamMemberFields(DomainModel):
    name: str
    email: str
    title: str
    department: str
    status: TeamMemberStatus = TeamMemberStatus.ACTIVE
    phone: str | None = None
    specialties: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    availability: str = "9am-5pm"
    notes: str | None = None

    @field_validator("specialties", "certifications", mode="before")
    @classmethod
    def _split_list(cls, value: object) -> object:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return value


class TeamMemberDraft(_TeamMemberFields):
    """Validated input for creating or updating a team member."""

    @field_validator("name", "title", "department")
    @classmethod
    def _required(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("is required")
        return stripped

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("is required")
        if not EMAIL_PATTERN.match(stripped):
            raise ValueError("Invalid email format")
        return stripped


class TeamMember(_TeamMemberFields, TimestampedResource):
    """Persisted team member."""


__all__ = [
    "DirectoryUser",
    "OnboardingState",
    "TeamMember",
    "TeamMemberDraft",
    "TeamMemberStatus",
    "EMAIL_PATTERN",
]
