from __future__ import annotations

from typing import Any

from admin_workstation.data import FilterPredicate
from admin_workstation.services.base import EventHook


class FilterState:
    """Holds the active directory predicate; every change replaces it whole."""

    def __init__(self, predicate: FilterPredicate | None = None) -> None:
        self._predicate = predicate or FilterPredicate()
        self.changed: EventHook[FilterPredicate] = EventHook()

    @property
    def predicate(self) -> FilterPredicate:
        return self._predicate

    def set_filter(self, predicate: FilterPredicate) -> None:
        self._predicate = predicate
        self.changed.emit(predicate)

    def update(self, **fields: Any) -> FilterPredicate:
        """Overwrite individual fields, producing a new predicate."""

        predicate = FilterPredicate.model_validate(
            {**self._predicate.model_dump(), **fields},
        )
        self.set_filter(predicate)
        return predicate

    def reset(self) -> None:
        self.set_filter(FilterPredicate())


__all__ = ["FilterState"]
