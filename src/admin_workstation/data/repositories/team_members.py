from __future__ import annotations

from sqlmodel import col

from admin_workstation.data.models import TeamMember
from admin_workstation.data.sql import TeamMemberRecord
from admin_workstation.data.sql.mapper import (
    record_to_team_member,
    team_member_to_record,
)

from .base import TenantScopedRepository


class TeamMemberRepository(TenantScopedRepository[TeamMember, TeamMemberRecord]):
    def __init__(self, db) -> None:
        super().__init__(
            db,
            resource_name="team_members",
            record_model=TeamMemberRecord,
        )

    def _to_record(self, model: TeamMember, tenant_id: str | None) -> TeamMemberRecord:
        return team_member_to_record(model, tenant_id=tenant_id)

    def _from_record(self, record: TeamMemberRecord) -> TeamMember:
        return record_to_team_member(record)

    def list_all(self, *, tenant_id: str | None = None) -> list[TeamMember]:
        stmt = self._select_records(tenant_id).order_by(col(TeamMemberRecord.name).asc())
        with self._db.session() as session:
            return [self._from_record(record) for record in session.exec(stmt).all()]

    def find_by_email(self, email: str, *, tenant_id: str | None = None) -> TeamMember | None:
        stmt = self._select_records(tenant_id).where(
            TeamMemberRecord.email == email.strip().lower(),
        )
        with self._db.session() as session:
            record = session.exec(stmt).first()
            return self._from_record(record) if record else None

    def replace(self, member: TeamMember, *, tenant_id: str | None = None) -> TeamMember:
        record = self._to_record(member, tenant_id)
        with self._db.session() as session:
            merged = session.merge(record)
            session.commit()
            session.refresh(merged)
            return self._from_record(merged)


__all__ = ["TeamMemberRepository"]
