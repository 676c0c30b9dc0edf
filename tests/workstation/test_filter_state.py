from __future__ import annotations

from admin_workstation.data import DateRange, FilterPredicate, Role, Status
from admin_workstation.workstation import FilterState


def test_set_filter_replaces_predicate_whole() -> None:
    state = FilterState(FilterPredicate(search="alice", role=Role.ADMIN))
    replacement = FilterPredicate(status=Status.PENDING)

    state.set_filter(replacement)

    assert state.predicate is replacement
    assert state.predicate.search == ""
    assert state.predicate.role is None


def test_update_overwrites_fields_into_new_snapshot() -> None:
    state = FilterState(FilterPredicate(search="alice"))
    original = state.predicate

    updated = state.update(role="team_lead", date_range="week")

    assert updated is state.predicate
    assert updated.role is Role.TEAM_LEAD
    assert updated.date_range is DateRange.WEEK
    assert updated.search == "alice"
    assert original.role is None


def test_reset_restores_default_predicate() -> None:
    state = FilterState(FilterPredicate(search="bob", department="Sales"))
    emitted: list[FilterPredicate] = []
    state.changed.subscribe(emitted.append)

    state.reset()

    assert state.predicate.is_default
    assert emitted == [FilterPredicate()]
