"""Public API diff module.

Exports the ``PublicItemsDiff`` result type, the ``between`` convenience
function and ``ChangedPublicItem``.  Also exports the higher-level report
and deny-policy helpers from the ``report`` submodule.
"""
from __future__ import annotations

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

__all__ = [
    "PublicItemsDiff",
    "ChangedPublicItem",
    "between",
    "DiffReport",
    "DiffEntry",
    "ChangeImpact",
    "DenyPolicy",
    "build_report",
    "REMOVED",
    "CHANGED",
    "ADDED",
    "CATEGORIES",
]
