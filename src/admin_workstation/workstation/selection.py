from __future__ import annotations

from typing import Iterable

from admin_workstation.services.base import EventHook


class SelectionModel:
    """Selected entity ids, independent of the active filter.

    Every change swaps in a new ``frozenset`` so snapshots handed out earlier
    never change underneath their holders.
    """

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: frozenset[str] = frozenset(ids)
        self.changed: EventHook[frozenset[str]] = EventHook()

    @property
    def ids(self) -> frozenset[str]:
        return self._ids

    def toggle(self, item_id: str) -> None:
        self._replace(self._ids ^ {item_id})

    def select_all(self, ids: Iterable[str]) -> None:
        self._replace(frozenset(ids))

    def clear(self) -> None:
        self._replace(frozenset())

    def retain(self, ids: Iterable[str]) -> None:
        """Drop selected ids that are not in ``ids``."""

        self._replace(self._ids & frozenset(ids))

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._ids

    def count(self) -> int:
        return len(self._ids)

    def size(self) -> int:
        return len(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._ids

    def _replace(self, ids: frozenset[str]) -> None:
        if ids == self._ids:
            return
        self._ids = ids
        self.changed.emit(ids)


__all__ = ["SelectionModel"]
