"""Structural diff between two public API snapshots.

``PublicItemsDiff.between`` compares two collections of ``PublicItem``
objects and classifies every item that differs as removed, added or
changed.  A changed item is an item whose path was both removed and
added, i.e. the same logical location now renders differently.

The comparison works on bags (multisets), never on sets: the same
rendered item may legitimately appear more than once in a snapshot, and
collapsing duplicates would corrupt the counts.

Usage
-----
::

    from apidiff.diff import between

    result = between(old_items, new_items)
    for item in result.removed:
        print(f"-{item}")
    for change in result.changed:
        print(f"-{change.old}")
        print(f"+{change.new}")
    for item in result.added:
        print(f"+{item}")
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from apidiff.items.nodes import PublicItem

logger = logging.getLogger(__name__)

ItemsWithPath = dict[tuple[str, ...], list[PublicItem]]


@dataclass(frozen=True, order=True)
class ChangedPublicItem:
    """An item that changed between two snapshots.

    ``old`` and ``new`` share the same ``path`` but differ in rendering.
    Pairs sort by ``old``, then ``new``.

    Parameters
    ----------
    old:
        How the item used to look.
    new:
        How the item looks now.
    """

    old: PublicItem
    new: PublicItem

    @property
    def path(self) -> tuple[str, ...]:
        return self.old.path

    def __str__(self) -> str:
        return f"{self.old} → {self.new}"


@dataclass(frozen=True)
class PublicItemsDiff:
    """The result of diffing two public API snapshots.

    All three sequences are sorted tuples, so the result is hashable.

    Parameters
    ----------
    removed:
        Items that have been removed from the public API.  A MAJOR
        change in semver terms.
    changed:
        Items whose rendering changed.  Generally a MAJOR change, though
        exceptions exist (e.g. a return type spelled differently but
        meaning the same type).
    added:
        Items that have been added to the public API.  A MINOR change in
        semver terms.
    """

    removed: tuple[PublicItem, ...] = ()
    changed: tuple[ChangedPublicItem, ...] = ()
    added: tuple[PublicItem, ...] = ()

    def __post_init__(self) -> None:
        for name in ("removed", "changed", "added"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @classmethod
    def between(
        cls,
        old_items: Iterable[PublicItem],
        new_items: Iterable[PublicItem],
    ) -> "PublicItemsDiff":
        """Diff the public API between two versions of a library.

        Parameters
        ----------
        old_items:
            Items of the baseline snapshot, in any order, duplicates allowed.
        new_items:
            Items of the updated snapshot, in any order, duplicates allowed.

        Returns
        -------
        PublicItemsDiff
            Sorted removed, changed and added items.  Empty when both
            inputs hold the same items with the same multiplicities.
        """
        old = Counter(old_items)
        new = Counter(new_items)

        # Counter subtraction keeps only positive counts, so an item present
        # the same number of times on both sides contributes nothing.
        removed_by_path = _bag_to_path_map(old - new)
        added_by_path = _bag_to_path_map(new - old)

        removed: list[PublicItem] = []
        changed: list[ChangedPublicItem] = []
        added: list[PublicItem] = []

        touched_paths = removed_by_path.keys() | added_by_path.keys()
        for path in touched_paths:
            removed_items = removed_by_path.get(path, [])
            added_items = added_by_path.get(path, [])
            while removed_items or added_items:
                if removed_items and added_items:
                    changed.append(
                        ChangedPublicItem(old=removed_items.pop(), new=added_items.pop())
                    )
                elif removed_items:
                    removed.append(removed_items.pop())
                else:
                    added.append(added_items.pop())

        removed.sort()
        changed.sort()
        added.sort()

        logger.debug(
            "Diffed %d old vs %d new item(s) over %d touched path(s): "
            "%d removed, %d changed, %d added",
            sum(old.values()),
            sum(new.values()),
            len(touched_paths),
            len(removed),
            len(changed),
            len(added),
        )
        return cls(removed=tuple(removed), changed=tuple(changed), added=tuple(added))

    def is_empty(self) -> bool:
        """Return ``True`` when nothing was removed, changed or added."""
        return not (self.removed or self.changed or self.added)

    def __len__(self) -> int:
        return len(self.removed) + len(self.changed) + len(self.added)


def _bag_to_path_map(bag: Counter[PublicItem]) -> ItemsWithPath:
    """Expand a bag of items and group the instances by path."""
    by_path: ItemsWithPath = defaultdict(list)
    for item in bag.elements():
        by_path[item.path].append(item)
    return dict(by_path)


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def between(
    old_items: Iterable[PublicItem],
    new_items: Iterable[PublicItem],
) -> PublicItemsDiff:
    """Compare two public API snapshots and return the classified diff.

    Example
    -------
    ::

        from apidiff.diff import between
        result = between(old_items, new_items)
        if not result.is_empty():
            print(result)
    """
    return PublicItemsDiff.between(old_items, new_items)
