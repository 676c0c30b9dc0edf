from __future__ import annotations

from admin_workstation.data.models import (
    DirectoryUser,
    FilterLogic,
    FilterPreset,
    OnboardingState,
    Role,
    Status,
    TeamMember,
    TeamMemberStatus,
)
from admin_workstation.utils import as_utc, utc_now

from .models import DirectoryUserRecord, FilterPresetRecord, TeamMemberRecord


def user_to_record(
    user: DirectoryUser, *, tenant_id: str | None = None
) -> DirectoryUserRecord:
    now = utc_now()
    return DirectoryUserRecord(
        id=user.id,
        tenant_id=tenant_id if tenant_id is not None else user.tenant_id,
        name=user.name,
        email=user.email,
        role=Role(user.role).value,
        status=Status(user.status).value,
        department=user.department,
        archived=user.archived,
        onboarding_state=OnboardingState(user.onboarding_state).value,
        onboarding_due_at=user.onboarding_due_at,
        created_at=user.created_at or now,
        updated_at=now,
    )


def record_to_user(record: DirectoryUserRecord) -> DirectoryUser:
    return DirectoryUser(
        id=record.id,
        tenant_id=record.tenant_id,
        name=record.name,
        email=record.email,
        role=Role(record.role),
        status=Status(record.status),
        department=record.department,
        archived=record.archived,
        onboarding_state=OnboardingState(record.onboarding_state),
        onboarding_due_at=as_utc(record.onboarding_due_at),
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


def team_member_to_record(
    member: TeamMember, *, tenant_id: str | None = None
) -> TeamMemberRecord:
    now = utc_now()
    return TeamMemberRecord(
        id=member.id,
        tenant_id=tenant_id if tenant_id is not None else member.tenant_id,
        name=member.name,
        email=member.email,
        title=member.title,
        department=member.department,
        status=TeamMemberStatus(member.status).value,
        phone=member.phone,
        specialties=list(member.specialties),
        certifications=list(member.certifications),
        availability=member.availability,
        notes=member.notes,
        created_at=member.created_at or now,
        updated_at=member.updated_at or now,
    )


def record_to_team_member(record: TeamMemberRecord) -> TeamMember:
    return TeamMember(
        id=record.id,
        tenant_id=record.tenant_id,
        name=record.name,
        email=record.email,
        title=record.title,
        department=record.department,
        status=TeamMemberStatus(record.status),
        phone=record.phone,
        specialties=record.specialties or [],
        certifications=record.certifications or [],
        availability=record.availability or "9am-5pm",
        notes=record.notes,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


def preset_to_record(
    preset: FilterPreset, *, tenant_id: str | None = None
) -> FilterPresetRecord:
    now = utc_now()
    return FilterPresetRecord(
        id=preset.id,
        tenant_id=tenant_id if tenant_id is not None else preset.tenant_id,
        name=preset.name,
        description=preset.description,
        entity_type=preset.entity_type,
        filter_config=dict(preset.filter_config),
        filter_logic=FilterLogic(preset.filter_logic).value,
        is_public=preset.is_public,
        is_default=preset.is_default,
        icon=preset.icon,
        color=preset.color,
        usage_count=preset.usage_count,
        last_used_at=preset.last_used_at,
        created_by=preset.created_by,
        created_at=preset.created_at or now,
        updated_at=preset.updated_at or now,
    )


def record_to_preset(record: FilterPresetRecord) -> FilterPreset:
    return FilterPreset(
        id=record.id,
        tenant_id=record.tenant_id,
        name=record.name,
        description=record.description,
        entity_type=record.entity_type,
        filter_config=dict(record.filter_config or {}),
        filter_logic=FilterLogic(record.filter_logic),
        is_public=record.is_public,
        is_default=record.is_default,
        icon=record.icon,
        color=record.color,
        usage_count=record.usage_count,
        last_used_at=as_utc(record.last_used_at),
        created_by=record.created_by,
        created_at=as_utc(record.created_at),
        updated_at=as_utc(record.updated_at),
    )


__all__ = [
    "user_to_record",
    "record_to_user",
    "team_member_to_record",
    "record_to_team_member",
    "preset_to_record",
    "record_to_preset",
]
