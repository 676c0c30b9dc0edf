from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_
from sqlmodel import col

from admin_workstation.data.models import FilterPreset, FilterPresetScope
from admin_workstation.data.sql import FilterPresetRecord
from admin_workstation.data.sql.mapper import preset_to_record, record_to_preset

from .base import TenantScopedRepository


class FilterPresetRepository(TenantScopedRepository[FilterPreset, FilterPresetRecord]):
    def __init__(self, db) -> None:
        super().__init__(
            db,
            resource_name="filter_presets",
            record_model=FilterPresetRecord,
        )

    def _to_record(self, model: FilterPreset, tenant_id: str | None) -> FilterPresetRecord:
        return preset_to_record(model, tenant_id=tenant_id)

    def _from_record(self, record: FilterPresetRecord) -> FilterPreset:
        return record_to_preset(record)

    def list_visible(
        self,
        *,
        tenant_id: str | None,
        user_id: str,
        entity_type: str,
        scope: FilterPresetScope,
    ) -> list[FilterPreset]:
        """Return presets visible to ``user_id`` ordered for the saved-views menu."""

        record = FilterPresetRecord
        stmt = self._select_records(tenant_id).where(record.entity_type == entity_type)
        if scope is FilterPresetScope.PUBLIC:
            stmt = stmt.where(col(record.is_public).is_(True))
        elif scope is FilterPresetScope.MINE:
            stmt = stmt.where(record.created_by == user_id)
        else:
            stmt = stmt.where(
                or_(col(record.is_public).is_(True), record.created_by == user_id),
            )
        stmt = stmt.order_by(
            col(record.is_default).desc(),
            col(record.usage_count).desc(),
            col(record.created_at).desc(),
        )
        with self._db.session() as session:
            return [self._from_record(item) for item in session.exec(stmt).all()]

    def exists_named(self, name: str, *, tenant_id: str | None, created_by: str) -> bool:
        stmt = (
            self._select_records(tenant_id)
            .where(FilterPresetRecord.created_by == created_by)
            .where(FilterPresetRecord.name == name)
        )
        with self._db.session() as session:
            return session.exec(stmt).first() is not None

    def record_usage(
        self,
        preset_id: str,
        *,
        tenant_id: str | None,
        used_at: datetime,
    ) -> FilterPreset | None:
        with self._db.session() as session:
            stmt = self._select_records(tenant_id).where(FilterPresetRecord.id == preset_id)
            record = session.exec(stmt).one_or_none()
            if record is None:
                return None
            record.usage_count += 1
            record.last_used_at = used_at
            record.updated_at = used_at
            session.add(record)
            session.commit()
            session.refresh(record)
            return self._from_record(record)


__all__ = ["FilterPresetRepository"]
