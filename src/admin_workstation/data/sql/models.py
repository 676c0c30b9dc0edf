from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Column, JSON, UniqueConstraint
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SchemaVersion(SQLModel, table=True):
    """Tracks the current schema version applied to the database."""

    key: str = Field(default="schema_version", primary_key=True)
    version: int = Field(index=True)
    applied_at: datetime = Field(default_factory=_utc_now, nullable=False)


class DirectoryUserRecord(SQLModel, table=True):
    """User directory row scoped to a tenant."""

    __tablename__ = "directory_users"

    id: str = Field(primary_key=True)
    tenant_id: str | None = Field(default=None, index=True)
    name: str = Field(index=True)
    email: str = Field(index=True)
    role: str = Field(index=True)
    status: str = Field(index=True)
    department: str | None = Field(default=None, index=True)
    archived: bool = Field(default=False, index=True)
    onboarding_state: str = Field(default="not_started", index=True)
    onboarding_due_at: datetime | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=_utc_now, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=_utc_now, nullable=False)


class TeamMemberRecord(SQLModel, table=True):
    """Team member profile with list fields stored as JSON."""

    __tablename__ = "team_members"

    id: str = Field(primary_key=True)
    tenant_id: str | None = Field(default=None, index=True)
    name: str = Field(index=True)
    email: str = Field(index=True)
    title: str
    department: str = Field(index=True)
    status: str = Field(index=True)
    phone: str | None = Field(default=None)
    specialties: list[str] | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    certifications: list[str] | None = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
    )
    availability: str | None = Field(default=None)
    notes: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=_utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=_utc_now, nullable=False)


class FilterPresetRecord(SQLModel, table=True):
    """Saved filter preset; names are unique per tenant and creator."""

    __tablename__ = "filter_presets"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "created_by",
            "name",
            name="uq_filter_presets_tenant_creator_name",
        ),
    )

    id: str = Field(primary_key=True)
    tenant_id: str | None = Field(default=None, index=True)
    name: str = Field(index=True)
    description: str | None = Field(default=None)
    entity_type: str = Field(default="users", index=True)
    filter_config: dict | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    filter_logic: str = Field(default="AND")
    is_public: bool = Field(default=False, index=True)
    is_default: bool = Field(default=False, index=True)
    icon: str | None = Field(default=None)
    color: str | None = Field(default=None)
    usage_count: int = Field(default=0, index=True)
    last_used_at: datetime | None = Field(default=None)
    created_by: str = Field(index=True)
    created_at: datetime = Field(default_factory=_utc_now, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=_utc_now, nullable=False)
