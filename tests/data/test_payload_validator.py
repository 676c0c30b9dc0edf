from __future__ import annotations

from admin_workstation.data import FilterPreset, PayloadValidator


def test_parse_many_skips_invalid_items_and_records_issues() -> None:
    validator = PayloadValidator("filter_presets")

    presets = validator.parse_many(
        FilterPreset,
        [
            {"id": "p1", "name": "Ok", "createdBy": "admin-1"},
            {"id": "p2", "createdBy": "admin-1"},
        ],
    )

    assert [preset.id for preset in presets] == ["p1"]
    issues = validator.issues()
    assert len(issues) == 1
    assert issues[0].resource == "filter_presets"
    assert issues[0].identifier == "p2"
    assert issues[0].fields == ("name",)


def test_parse_returns_none_for_malformed_item() -> None:
    validator = PayloadValidator("filter_presets")

    assert validator.parse(FilterPreset, {"createdBy": "admin-1"}) is None
    assert validator.issues()[0].identifier is None
