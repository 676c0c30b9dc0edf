from __future__ import annotations

import json
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from pydantic import Field, NonNegativeInt, field_validator, model_validator

from .common import DomainModel, TimestampedResource


class _CaseInsensitiveEnum(StrEnum):
    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            normalised = value.strip().lower()
            for member in cls:
                if member.value.lower() == normalised or member.name.lower() == normalised:
                    return member
        return None


class Role(_CaseInsensitiveEnum):
    ADMIN = "ADMIN"
    TEAM_LEAD = "TEAM_LEAD"
    TEAM_MEMBER = "TEAM_MEMBER"
    STAFF = "STAFF"
    CLIENT = "CLIENT"


class Status(_CaseInsensitiveEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"


class DateRange(_CaseInsensitiveEnum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class FilterLogic(_CaseInsensitiveEnum):
    AND = "AND"
    OR = "OR"


class FilterPresetScope(_CaseInsensitiveEnum):
    MINE = "mine"
    PUBLIC = "public"
    SHARED = "shared"


class FilterPredicate(DomainModel):
    """Active query for the user directory; replaced wholesale on change."""

    search: str = ""
    role: Role | None = None
    status: Status | None = None
    department: str | None = None
    date_range: DateRange = Field(default=DateRange.ALL, alias="dateRange")
    date_from: datetime | None = Field(default=None, alias="dateFrom")
    date_to: datetime | None = Field(default=None, alias="dateTo")

    @classmethod
    def from_filter_config(cls, config: dict[str, Any] | None) -> "FilterPredicate":
        return cls.model_validate(config or {})

    def to_filter_config(self, logic: FilterLogic | None = None) -> dict[str, Any]:
        config = self.to_api()
        if logic is not None:
            config["logic"] = logic.value
        return config

    @property
    def is_default(self) -> bool:
        return self == FilterPredicate()

    def date_bounds(self, now: datetime) -> tuple[datetime | None, datetime | None]:
        """Return the inclusive creation window selected by ``date_range``."""

        match self.date_range:
            case DateRange.TODAY:
                start = now.replace(hour=0, minute=0, second=0, microsecond=0)
                return start, None
            case DateRange.WEEK:
                return now - timedelta(days=7), None
            case DateRange.MONTH:
                return now - timedelta(days=30), None
            case DateRange.CUSTOM:
                return self.date_from, self.date_to
            case _:
                return None, None


class FilterPresetDraft(DomainModel):
    """Fields accepted when saving a filter preset."""

    name: str = ""
    description: str | None = None
    entity_type: str = Field(default="users", alias="entityType")
    filter_config: dict[str, Any] | None = Field(default=None, alias="filterConfig")
    is_public: bool = Field(default=False, alias="isPublic")
    icon: str | None = None
    color: str | None = None

    @property
    def filter_logic(self) -> FilterLogic:
        raw = (self.filter_config or {}).get("logic")
        if raw is None:
            return FilterLogic.AND
        try:
            return FilterLogic(raw)
        except ValueError:
            return FilterLogic.AND


class FilterPreset(TimestampedResource):
    """Named, persisted filter predicate."""

    name: str
    description: str | None = None
    entity_type: str = Field(default="users", alias="entityType")
    filter_config: dict[str, Any] = Field(default_factory=dict, alias="filterConfig")
    filter_logic: FilterLogic = Field(default=FilterLogic.AND, alias="filterLogic")
    is_public: bool = Field(default=False, alias="isPublic")
    is_default: bool = Field(default=False, alias="isDefault")
    icon: str | None = None
    color: str | None = None
    usage_count: NonNegativeInt = Field(default=0, alias="usageCount")
    last_used_at: datetime | None = Field(default=None, alias="lastUsedAt")
    created_by: str = Field(alias="createdBy")

    @model_validator(mode="before")
    @classmethod
    def _creator_reference(cls, data: Any) -> Any:
        if isinstance(data, dict) and "createdBy" not in data and "created_by" not in data:
            creator = data.get("creator")
            if isinstance(creator, dict) and creator.get("id"):
                data = {**data, "createdBy": creator["id"]}
        return data

    @field_validator("filter_config", mode="before")
    @classmethod
    def _decode_filter_config(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value)
        return value

    def predicate(self) -> FilterPredicate:
        return FilterPredicate.from_filter_config(self.filter_config)

    def readable_by(self, user_id: str) -> bool:
        return self.is_public or self.created_by == user_id


__all__ = [
    "DateRange",
    "FilterLogic",
    "FilterPredicate",
    "FilterPreset",
    "FilterPresetDraft",
    "FilterPresetScope",
    "Role",
    "Status",
]
