"""apidiff — structural diffing of public API snapshots.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import apidiff

    old = apidiff.load("api-1.0.json")
    new = apidiff.load("api-1.1.json")

    result = apidiff.between(old, new)
    if result.is_empty():
        print("No public API changes")

    report = apidiff.report(result, "1.0", "1.1")
    print(report.summary())

    apidiff.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apidiff.diff.diff import PublicItemsDiff
    from apidiff.diff.report import DiffReport
    from apidiff.items.nodes import PublicItem


def between(
    old: "Iterable[PublicItem]", new: "Iterable[PublicItem]"
) -> "PublicItemsDiff":
    """Diff two public API snapshots.

    Parameters
    ----------
    old:
        Items of the baseline snapshot.
    new:
        Items of the updated snapshot.

    Returns
    -------
    PublicItemsDiff
        Sorted removed, changed and added items.
    """
    from apidiff.diff.diff import between as _between

    return _between(old, new)


def load(path: str | Path) -> list["PublicItem"]:
    """Read a JSON or YAML snapshot file into a list of items.

    Raises
    ------
    OSError
        If the file cannot be read.
    apidiff.items.ItemFormatError
        If the file is not a valid snapshot.
    """
    from apidiff.items.serializer import load_items

    return load_items(path)


def dump(items: "Iterable[PublicItem]", path: str | Path) -> None:
    """Write items to a JSON or YAML snapshot file (chosen by suffix)."""
    from apidiff.items.serializer import dump_items

    dump_items(items, path)


def report(
    result: "PublicItemsDiff", old_label: str = "old", new_label: str = "new"
) -> "DiffReport":
    """Annotate a diff with paths and semver impact."""
    from apidiff.diff.report import build_report

    return build_report(result, old_label, new_label)


__all__ = [
    "__version__",
    "between",
    "load",
    "dump",
    "report",
]
