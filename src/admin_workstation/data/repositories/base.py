from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, Sequence, TypeVar

from sqlalchemy import delete, func
from sqlmodel import SQLModel, Session, col, select

from admin_workstation.data.sql import DatabaseManager
from admin_workstation.utils import get_logger


DomainT = TypeVar("DomainT")
RecordT = TypeVar("RecordT", bound=SQLModel)

logger = get_logger(__name__)


class TenantScopedRepository(Generic[DomainT, RecordT]):
    """Shared CRUD helpers for records carrying a ``tenant_id`` column."""

    def __init__(
        self,
        db: DatabaseManager,
        *,
        resource_name: str,
        record_model: type[RecordT],
    ) -> None:
        self._db = db
        self._resource = resource_name
        self._record_model = record_model

    @property
    def resource_name(self) -> str:
        return self._resource

    # ----------------------------------------------------------------- Public

    def list_all(self, *, tenant_id: str | None = None) -> list[DomainT]:
        with self._db.session() as session:
            records = session.exec(self._select_records(tenant_id)).all()
            return [self._from_record(record) for record in records]

    def get(self, item_id: str, *, tenant_id: str | None = None) -> DomainT | None:
        with self._db.session() as session:
            stmt = self._select_records(tenant_id).where(self._record_model.id == item_id)
            record = session.exec(stmt).one_or_none()
            return self._from_record(record) if record else None

    def count(self, *, tenant_id: str | None = None) -> int:
        with self._db.session() as session:
            stmt = select(func.count(self._record_model.id)).where(
                self._record_model.tenant_id == tenant_id,
            )
            return session.exec(stmt).one()

    def add(self, item: DomainT, *, tenant_id: str | None = None) -> DomainT:
        """Insert a new row; integrity errors propagate to the caller."""

        record = self._to_record(item, tenant_id)
        with self._db.session() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            return self._from_record(record)

    def upsert_many(
        self,
        items: Iterable[DomainT],
        *,
        tenant_id: str | None = None,
    ) -> int:
        records = [self._to_record(item, tenant_id) for item in items]
        with self._db.session() as session:
            for record in records:
                session.merge(record)
            session.commit()
        logger.debug(
            "Upserted records",
            resource=self._resource,
            tenant_id=tenant_id,
            count=len(records),
        )
        return len(records)

    def delete(self, item_ids: Sequence[str], *, tenant_id: str | None = None) -> int:
        if not item_ids:
            return 0
        with self._db.session() as session:
            stmt = (
                delete(self._record_model)
                .where(self._record_model.tenant_id == tenant_id)
                .where(col(self._record_model.id).in_(list(item_ids)))
            )
            result = session.exec(stmt)
            session.commit()
            return int(result.rowcount or 0)

    # --------------------------------------------------------------- Internals

    def _select_records(self, tenant_id: str | None):
        return select(self._record_model).where(
            self._record_model.tenant_id == tenant_id,
        )

    def _records_by_ids(
        self,
        session: Session,
        item_ids: Sequence[str],
        tenant_id: str | None,
    ) -> list[RecordT]:
        stmt = self._select_records(tenant_id).where(
            col(self._record_model.id).in_(list(item_ids)),
        )
        return list(session.exec(stmt).all())

    # ------------------------------------------------------------ Abstractions

    def _to_record(self, model: DomainT, tenant_id: str | None) -> RecordT:
        raise NotImplementedError

    def _from_record(self, record: RecordT) -> DomainT:
        raise NotImplementedError


__all__ = ["TenantScopedRepository"]
