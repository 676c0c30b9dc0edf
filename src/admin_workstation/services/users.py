from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Iterable, Sequence

from admin_workstation.data import (
    DirectoryUser,
    DirectoryUserRepository,
    FilterPredicate,
    Role,
    Status,
)
from admin_workstation.errors import ValidationError
from admin_workstation.services.base import (
    EventHook,
    MutationStatus,
    ServiceErrorEvent,
    run_optimistic_mutation,
)
from admin_workstation.utils import get_logger


logger = get_logger(__name__)


class BulkActionType(StrEnum):
    ROLE = "role"
    STATUS = "status"
    DEPARTMENT = "department"
    ARCHIVE = "archive"


_BOOLEAN_VALUES = {"true": True, "false": False, "1": True, "0": False}


@dataclass(slots=True)
class BulkMutationEvent:
    tenant_id: str | None
    action_type: str
    action_value: str
    user_ids: tuple[str, ...]
    status: MutationStatus
    error: Exception | None = None


def resolve_bulk_changes(action_type: str, action_value: str) -> dict[str, Any]:
    """Translate an action/value pair into directory column updates."""

    try:
        kind = BulkActionType(action_type.strip().lower())
    except ValueError as exc:
        raise ValidationError(
            f"Unsupported bulk action: {action_type}",
            fields=("actionType",),
        ) from exc

    value = action_value.strip()
    if not value:
        raise ValidationError("Bulk action value is required", fields=("actionValue",))

    match kind:
        case BulkActionType.ROLE:
            try:
                return {"role": Role(value).value}
            except ValueError as exc:
                raise ValidationError(f"Unknown role: {value}", fields=("actionValue",)) from exc
        case BulkActionType.STATUS:
            try:
                return {"status": Status(value).value}
            except ValueError as exc:
                raise ValidationError(
                    f"Unknown status: {value}",
                    fields=("actionValue",),
                ) from exc
        case BulkActionType.DEPARTMENT:
            return {"department": value}
        case BulkActionType.ARCHIVE:
            flag = _BOOLEAN_VALUES.get(value.lower())
            if flag is None:
                raise ValidationError(
                    f"Archive value must be true or false, got {value}",
                    fields=("actionValue",),
                )
            return {"archived": flag}


class UserDirectoryService:
    """Directory listing plus the bulk mutations applied from the workstation."""

    def __init__(self, repository: DirectoryUserRepository) -> None:
        self._repository = repository

        self.mutations: EventHook[BulkMutationEvent] = EventHook()
        self.errors: EventHook[ServiceErrorEvent] = EventHook()

    # ------------------------------------------------------------------ Queries

    def list_users(
        self,
        predicate: FilterPredicate | None = None,
        *,
        tenant_id: str | None = None,
    ) -> list[DirectoryUser]:
        users = self._repository.search(predicate or FilterPredicate(), tenant_id=tenant_id)
        logger.debug("Directory listing", tenant_id=tenant_id, count=len(users))
        return users

    def get_user(self, user_id: str, *, tenant_id: str | None = None) -> DirectoryUser | None:
        return self._repository.get(user_id, tenant_id=tenant_id)

    def count_users(self, *, tenant_id: str | None = None) -> int:
        return self._repository.count(tenant_id=tenant_id)

    # ----------------------------------------------------------------- Actions

    def import_users(
        self,
        users: Iterable[DirectoryUser],
        *,
        tenant_id: str | None = None,
    ) -> int:
        count = self._repository.upsert_many(users, tenant_id=tenant_id)
        logger.info("Imported directory users", tenant_id=tenant_id, count=count)
        return count

    async def apply_bulk_action(
        self,
        action_type: str,
        action_value: str,
        ids: Sequence[str],
        *,
        tenant_id: str | None = None,
    ) -> int:
        """Apply one action to every listed user of the tenant; returns rows updated."""

        user_ids = tuple(dict.fromkeys(ids))

        def build_event(status: MutationStatus, error: Exception | None) -> BulkMutationEvent:
            return BulkMutationEvent(
                tenant_id=tenant_id,
                action_type=action_type,
                action_value=action_value,
                user_ids=user_ids,
                status=status,
                error=error,
            )

        async def operation() -> int:
            changes = resolve_bulk_changes(action_type, action_value)
            return self._repository.update_many(user_ids, changes, tenant_id=tenant_id)

        try:
            updated = await run_optimistic_mutation(
                emitter=self.mutations,
                event_builder=build_event,
                operation=operation,
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception(
                "Bulk action failed",
                tenant_id=tenant_id,
                action_type=action_type,
                count=len(user_ids),
            )
            self.errors.emit(ServiceErrorEvent(tenant_id=tenant_id, error=exc))
            raise
        logger.info(
            "Bulk action applied",
            tenant_id=tenant_id,
            action_type=action_type,
            requested=len(user_ids),
            updated=updated,
        )
        return updated


__all__ = [
    "BulkActionType",
    "BulkMutationEvent",
    "UserDirectoryService",
    "resolve_bulk_changes",
]
