"""Tests for apidiff.diff.report — DiffReport, DiffEntry and DenyPolicy."""
from __future__ import annotations

import json

import pytest

from apidiff.diff.diff import ChangedPublicItem, PublicItemsDiff, between
from apidiff.diff.report import (
    ADDED,
    CATEGORIES,
    CHANGED,
    REMOVED,
    ChangeImpact,
    DenyPolicy,
    DiffEntry,
    DiffReport,
    build_report,
)
from apidiff.items.nodes import PublicItem
from apidiff.items.tokens import Token


def _item(path: str, text: str | None = None) -> PublicItem:
    return PublicItem(path=tuple(path.split("::")), tokens=(Token.identifier(text or path),))


def _mixed_diff() -> PublicItemsDiff:
    old = [_item("lib::gone"), _item("lib::f", "fn f(i32)"), _item("lib::keep")]
    new = [_item("lib::keep"), _item("lib::f", "fn f(i64)"), _item("lib::fresh")]
    return between(old, new)


# ---------------------------------------------------------------------------
# DiffEntry
# ---------------------------------------------------------------------------


class TestDiffEntry:
    def test_removed_str(self) -> None:
        entry = DiffEntry(category=REMOVED, path="a", old=_item("a"))
        assert str(entry) == "- a"

    def test_added_str(self) -> None:
        entry = DiffEntry(category=ADDED, path="a", new=_item("a"), impact=ChangeImpact.MINOR)
        assert str(entry) == "+ a"

    def test_changed_str(self) -> None:
        entry = DiffEntry(category=CHANGED, path="a", old=_item("a", "x"), new=_item("a", "y"))
        assert str(entry) == "± x → y"

    def test_frozen(self) -> None:
        entry = DiffEntry(category=REMOVED, path="a")
        with pytest.raises((AttributeError, TypeError)):
            entry.path = "b"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# build_report / DiffReport
# ---------------------------------------------------------------------------


class TestBuildReport:
    def test_entries_grouped_removed_changed_added(self) -> None:
        report = build_report(_mixed_diff(), "1.0", "2.0")
        assert [e.category for e in report.entries] == [REMOVED, CHANGED, ADDED]
        assert [e.path for e in report.entries] == ["lib::gone", "lib::f", "lib::fresh"]

    def test_impacts(self) -> None:
        report = build_report(_mixed_diff())
        impacts = {e.category: e.impact for e in report.entries}
        assert impacts == {
            REMOVED: ChangeImpact.MAJOR,
            CHANGED: ChangeImpact.MAJOR,
            ADDED: ChangeImpact.MINOR,
        }

    def test_counts(self) -> None:
        report = build_report(_mixed_diff())
        assert (report.removed_count, report.changed_count, report.added_count) == (1, 1, 1)
        assert report.has_changes

    def test_changed_entry_carries_both_items(self) -> None:
        entry = build_report(_mixed_diff()).by_category(CHANGED)[0]
        assert str(entry.old) == "fn f(i32)"
        assert str(entry.new) == "fn f(i64)"

    def test_default_labels(self) -> None:
        report = build_report(PublicItemsDiff())
        assert (report.old_label, report.new_label) == ("old", "new")


class TestRequiredBump:
    def test_major_when_something_removed(self) -> None:
        assert build_report(between([_item("a")], [])).required_bump == "major"

    def test_major_when_something_changed(self) -> None:
        assert build_report(between([_item("a", "x")], [_item("a", "y")])).required_bump == "major"

    def test_minor_when_only_added(self) -> None:
        assert build_report(between([], [_item("a")])).required_bump == "minor"

    def test_none_when_empty(self) -> None:
        assert build_report(between([_item("a")], [_item("a")])).required_bump == "none"


class TestDiffReportQueries:
    def test_by_path_prefix(self) -> None:
        report = build_report(_mixed_diff())
        assert [e.path for e in report.by_path_prefix("lib::f")] == ["lib::f", "lib::fresh"]
        assert report.by_path_prefix("other") == []

    def test_summary_no_changes(self) -> None:
        report = DiffReport(old_label="v1", new_label="v2")
        assert report.summary() == "No changes between 'v1' and 'v2'."

    def test_summary_lists_entries(self) -> None:
        text = build_report(_mixed_diff(), "v1", "v2").summary()
        assert "'v1' → 'v2'" in text
        assert "3 change(s): 1 removed, 1 changed, 1 added" in text
        assert "requires major bump" in text
        assert "- lib::gone" in text
        assert "+ lib::fresh" in text

    def test_to_dict_is_json_serializable(self) -> None:
        data = build_report(_mixed_diff(), "v1", "v2").to_dict()
        round_tripped = json.loads(json.dumps(data))
        assert round_tripped["total_changes"] == 3
        assert round_tripped["required_bump"] == "major"
        assert round_tripped["removed"] == ["lib::gone"]
        assert round_tripped["changed"] == [{"old": "fn f(i32)", "new": "fn f(i64)"}]
        assert round_tripped["added"] == ["lib::fresh"]
        assert round_tripped["entries"][2] == {
            "category": "added",
            "path": "lib::fresh",
            "old": None,
            "new": "lib::fresh",
            "impact": "MINOR",
        }


# ---------------------------------------------------------------------------
# DenyPolicy
# ---------------------------------------------------------------------------


class TestDenyPolicy:
    def test_default_denies_nothing(self) -> None:
        assert DenyPolicy().violations(_mixed_diff()) == []

    def test_all_expands_to_every_category(self) -> None:
        assert DenyPolicy.parse(["all"]).denied == frozenset(CATEGORIES)

    def test_parse_is_case_insensitive(self) -> None:
        assert DenyPolicy.parse([" Removed "]).denied == frozenset({REMOVED})

    def test_unknown_category(self) -> None:
        with pytest.raises(ValueError, match="bogus"):
            DenyPolicy.parse(["bogus"])

    def test_violations_in_category_order(self) -> None:
        policy = DenyPolicy.parse([ADDED, REMOVED])
        assert policy.violations(_mixed_diff()) == [REMOVED, ADDED]

    def test_empty_category_is_not_a_violation(self) -> None:
        policy = DenyPolicy.parse([REMOVED])
        assert policy.violations(between([], [_item("a")])) == []

    def test_changed_violation(self) -> None:
        diff = PublicItemsDiff(changed=[ChangedPublicItem(old=_item("a", "x"), new=_item("a", "y"))])
        assert DenyPolicy.parse([CHANGED]).violations(diff) == [CHANGED]
