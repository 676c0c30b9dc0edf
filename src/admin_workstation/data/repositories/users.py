from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Mapping, Sequence

from sqlalchemy import func, or_
from sqlmodel import col, select

from admin_workstation.data.models import (
    DirectoryUser,
    FilterPredicate,
    OnboardingState,
    Status,
)
from admin_workstation.data.sql import DirectoryUserRecord
from admin_workstation.data.sql.mapper import record_to_user, user_to_record
from admin_workstation.utils import escape_like, get_logger, sanitize_search_text, utc_now

from .base import TenantScopedRepository


logger = get_logger(__name__)

DUE_WINDOW = timedelta(days=7)

_UPDATABLE_COLUMNS = frozenset({"role", "status", "department", "archived"})


class DirectoryUserRepository(
    TenantScopedRepository[DirectoryUser, DirectoryUserRecord],
):
    def __init__(self, db) -> None:
        super().__init__(
            db,
            resource_name="directory_users",
            record_model=DirectoryUserRecord,
        )

    def _to_record(
        self,
        model: DirectoryUser,
        tenant_id: str | None,
    ) -> DirectoryUserRecord:
        return user_to_record(model, tenant_id=tenant_id)

    def _from_record(self, record: DirectoryUserRecord) -> DirectoryUser:
        return record_to_user(record)

    # ----------------------------------------------------------------- Queries

    def search(
        self,
        predicate: FilterPredicate,
        *,
        tenant_id: str | None = None,
        now: datetime | None = None,
        include_archived: bool = False,
    ) -> list[DirectoryUser]:
        """Return users matching every populated field of ``predicate``."""

        stmt = self._select_records(tenant_id)
        if not include_archived:
            stmt = stmt.where(col(DirectoryUserRecord.archived).is_(False))

        search = sanitize_search_text(predicate.search)
        if search:
            pattern = f"%{escape_like(search.lower())}%"
            stmt = stmt.where(
                or_(
                    func.lower(DirectoryUserRecord.name).like(pattern, escape="\\"),
                    func.lower(DirectoryUserRecord.email).like(pattern, escape="\\"),
                ),
            )
        if predicate.role is not None:
            stmt = stmt.where(DirectoryUserRecord.role == predicate.role.value)
        if predicate.status is not None:
            stmt = stmt.where(DirectoryUserRecord.status == predicate.status.value)
        if predicate.department:
            stmt = stmt.where(
                func.lower(DirectoryUserRecord.department)
                == predicate.department.strip().lower(),
            )

        start, end = predicate.date_bounds(now or utc_now())
        if start is not None:
            stmt = stmt.where(DirectoryUserRecord.created_at >= start)
        if end is not None:
            stmt = stmt.where(DirectoryUserRecord.created_at <= end)

        stmt = stmt.order_by(col(DirectoryUserRecord.name).asc())
        with self._db.session() as session:
            records = session.exec(stmt).all()
            users = [self._from_record(record) for record in records]
        logger.debug(
            "Directory search",
            tenant_id=tenant_id,
            count=len(users),
            has_search=bool(search),
        )
        return users

    def aggregate_counts(
        self,
        *,
        tenant_id: str | None = None,
        now: datetime | None = None,
    ) -> dict[str, int]:
        """Count the quick-stats buckets for non-archived users."""

        current = now or utc_now()
        record = DirectoryUserRecord

        def _count(*conditions: Any) -> int:
            stmt = (
                select(func.count(record.id))
                .where(record.tenant_id == tenant_id)
                .where(col(record.archived).is_(False))
            )
            for condition in conditions:
                stmt = stmt.where(condition)
            with self._db.session() as session:
                return int(session.exec(stmt).one())

        in_progress = record.onboarding_state == OnboardingState.IN_PROGRESS.value
        return {
            "total_users": _count(),
            "active_users": _count(record.status == Status.ACTIVE.value),
            "pending_approvals": _count(record.status == Status.PENDING.value),
            "in_progress_workflows": _count(in_progress),
            "due_this_week": _count(
                in_progress,
                col(record.onboarding_due_at).is_not(None),
                col(record.onboarding_due_at) >= current,
                col(record.onboarding_due_at) <= current + DUE_WINDOW,
            ),
        }

    # ---------------------------------------------------------------- Mutations

    def update_many(
        self,
        item_ids: Sequence[str],
        changes: Mapping[str, Any],
        *,
        tenant_id: str | None = None,
    ) -> int:
        """Apply column changes to the given users within one tenant."""

        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unsupported user columns: {', '.join(sorted(unknown))}")
        if not item_ids:
            return 0
        now = utc_now()
        with self._db.session() as session:
            records = self._records_by_ids(session, item_ids, tenant_id)
            for record in records:
                for key, value in changes.items():
                    setattr(record, key, value)
                record.updated_at = now
                session.add(record)
            session.commit()
        logger.debug(
            "Updated directory users",
            tenant_id=tenant_id,
            requested=len(item_ids),
            updated=len(records),
            columns=sorted(changes),
        )
        return len(records)


__all__ = ["DirectoryUserRepository"]
