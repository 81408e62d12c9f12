"""Annotated reports over a public API diff.

``build_report`` wraps a :class:`~apidiff.diff.diff.PublicItemsDiff` with
a flat list of :class:`DiffEntry` records that carry the category, the
path and the semver impact of each change, plus summary helpers for
printing and JSON/YAML output.

``DenyPolicy`` decides which categories of change should make a diff
"fail", e.g. to gate a release in CI.

Usage
-----
::

    from apidiff.diff import between
    from apidiff.diff.report import DenyPolicy, build_report

    result = between(old_items, new_items)
    report = build_report(result, "v1.0.0", "v1.1.0")
    print(report.summary())

    policy = DenyPolicy.parse(["removed", "changed"])
    if policy.violations(result):
        raise SystemExit(1)
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto

from apidiff.diff.diff import PublicItemsDiff
from apidiff.items.nodes import PATH_SEPARATOR, PublicItem

REMOVED = "removed"
CHANGED = "changed"
ADDED = "added"
CATEGORIES: tuple[str, ...] = (REMOVED, CHANGED, ADDED)


class ChangeImpact(Enum):
    """Semver impact of a single change."""

    MAJOR = auto()
    MINOR = auto()


_IMPACT_BY_CATEGORY: dict[str, ChangeImpact] = {
    REMOVED: ChangeImpact.MAJOR,
    CHANGED: ChangeImpact.MAJOR,
    ADDED: ChangeImpact.MINOR,
}

_MARKER_BY_CATEGORY: dict[str, str] = {REMOVED: "-", CHANGED: "±", ADDED: "+"}


# ---------------------------------------------------------------------------
# DiffEntry — one annotated change
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiffEntry:
    """A single annotated change.

    Parameters
    ----------
    category:
        ``"removed"``, ``"changed"`` or ``"added"``.
    path:
        The ``::``-joined path of the affected item.
    old:
        The item before the change (``None`` for additions).
    new:
        The item after the change (``None`` for removals).
    impact:
        Semver impact of the change.
    """

    category: str
    path: str
    old: PublicItem | None = None
    new: PublicItem | None = None
    impact: ChangeImpact = ChangeImpact.MAJOR

    @property
    def marker(self) -> str:
        return _MARKER_BY_CATEGORY[self.category]

    def __str__(self) -> str:
        if self.category == CHANGED:
            return f"{self.marker} {self.old} → {self.new}"
        item = self.old if self.category == REMOVED else self.new
        return f"{self.marker} {item}"


# ---------------------------------------------------------------------------
# DiffReport — collection of DiffEntries with summary helpers
# ---------------------------------------------------------------------------


@dataclass
class DiffReport:
    """Structured report over a public API diff.

    Parameters
    ----------
    old_label:
        Name of the baseline snapshot (e.g. a version or file name).
    new_label:
        Name of the updated snapshot.
    entries:
        Annotated entries: removed first, then changed, then added, each
        group in item order.
    diff:
        The underlying diff.
    """

    old_label: str
    new_label: str
    entries: list[DiffEntry] = field(default_factory=list)
    diff: PublicItemsDiff = field(default_factory=PublicItemsDiff)

    @property
    def has_changes(self) -> bool:
        """Return ``True`` when any differences were found."""
        return bool(self.entries)

    @property
    def removed_count(self) -> int:
        return len(self.diff.removed)

    @property
    def changed_count(self) -> int:
        return len(self.diff.changed)

    @property
    def added_count(self) -> int:
        return len(self.diff.added)

    @property
    def required_bump(self) -> str:
        """The minimum semver bump the diff calls for: major, minor or none."""
        impacts = {entry.impact for entry in self.entries}
        if ChangeImpact.MAJOR in impacts:
            return "major"
        if ChangeImpact.MINOR in impacts:
            return "minor"
        return "none"

    def by_category(self, category: str) -> list[DiffEntry]:
        """Return all entries of one category."""
        return [entry for entry in self.entries if entry.category == category]

    def by_path_prefix(self, prefix: str) -> list[DiffEntry]:
        """Return all entries whose path starts with *prefix*."""
        return [entry for entry in self.entries if entry.path.startswith(prefix)]

    def summary(self) -> str:
        """Return a multi-line human-readable summary of the report."""
        if not self.has_changes:
            return f"No changes between '{self.old_label}' and '{self.new_label}'."
        lines = [
            f"Diff: '{self.old_label}' → '{self.new_label}'",
            f"  {len(self.entries)} change(s): "
            f"{self.removed_count} removed, "
            f"{self.changed_count} changed, "
            f"{self.added_count} added "
            f"(requires {self.required_bump} bump)",
            "",
        ]
        for entry in self.entries:
            lines.append(f"  {entry}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, object]:
        """Serialise the report to a plain dictionary for JSON/YAML output."""
        return {
            "old": self.old_label,
            "new": self.new_label,
            "total_changes": len(self.entries),
            "required_bump": self.required_bump,
            REMOVED: [str(item) for item in self.diff.removed],
            CHANGED: [
                {"old": str(change.old), "new": str(change.new)}
                for change in self.diff.changed
            ],
            ADDED: [str(item) for item in self.diff.added],
            "entries": [
                {
                    "category": entry.category,
                    "path": entry.path,
                    "old": str(entry.old) if entry.old is not None else None,
                    "new": str(entry.new) if entry.new is not None else None,
                    "impact": entry.impact.name,
                }
                for entry in self.entries
            ],
        }


def build_report(
    diff: PublicItemsDiff, old_label: str = "old", new_label: str = "new"
) -> DiffReport:
    """Annotate ``diff`` with paths and semver impact."""
    entries: list[DiffEntry] = []
    for item in diff.removed:
        entries.append(_entry(REMOVED, item.path, old=item))
    for change in diff.changed:
        entries.append(_entry(CHANGED, change.path, old=change.old, new=change.new))
    for item in diff.added:
        entries.append(_entry(ADDED, item.path, new=item))
    return DiffReport(old_label=old_label, new_label=new_label, entries=entries, diff=diff)


def _entry(
    category: str,
    path: tuple[str, ...],
    old: PublicItem | None = None,
    new: PublicItem | None = None,
) -> DiffEntry:
    return DiffEntry(
        category=category,
        path=PATH_SEPARATOR.join(path),
        old=old,
        new=new,
        impact=_IMPACT_BY_CATEGORY[category],
    )


# ---------------------------------------------------------------------------
# DenyPolicy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DenyPolicy:
    """The categories of change that are not allowed.

    Parameters
    ----------
    denied:
        Subset of ``("removed", "changed", "added")``.
    """

    denied: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, values: Iterable[str]) -> "DenyPolicy":
        """Build a policy from category names; ``"all"`` denies everything.

        Raises
        ------
        ValueError
            If a name is not a known category.
        """
        denied: set[str] = set()
        for value in values:
            name = value.strip().lower()
            if name == "all":
                denied.update(CATEGORIES)
            elif name in CATEGORIES:
                denied.add(name)
            else:
                raise ValueError(
                    f"Unknown diff category {value!r}; "
                    f"expected one of: all, {', '.join(CATEGORIES)}"
                )
        return cls(denied=frozenset(denied))

    def violations(self, diff: PublicItemsDiff) -> list[str]:
        """Return the denied categories that are non-empty in ``diff``, in category order."""
        found = {REMOVED: diff.removed, CHANGED: diff.changed, ADDED: diff.added}
        return [category for category in CATEGORIES if category in self.denied and found[category]]
