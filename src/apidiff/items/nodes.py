"""Public API item definitions.

A ``PublicItem`` is one element of a library's public surface as seen
in a single snapshot: its logical ``path`` (e.g. ``("mycrate", "mod",
"func")``) plus the tokens that render it.  Items are frozen
dataclasses so they can be counted in bags, used as dict keys and
sorted.  Ordering is path first, then tokens.

Items are not required to be unique within a snapshot: two distinct
declarations may legitimately render to the same item.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from apidiff.items.tokens import Token, render_tokens

PATH_SEPARATOR = "::"


@dataclass(frozen=True, slots=True, order=True)
class PublicItem:
    """A single rendered public API item.

    Parameters
    ----------
    path:
        Ordered name segments identifying the item's logical location.
        Used as the grouping key when diffing.
    tokens:
        The rendering of the item.
    """

    path: tuple[str, ...]
    tokens: tuple[Token, ...]

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the item hashable.
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))
        if not isinstance(self.tokens, tuple):
            object.__setattr__(self, "tokens", tuple(self.tokens))

    def __str__(self) -> str:
        return render_tokens(self.tokens)

    def __repr__(self) -> str:
        return f"PublicItem({self.path_str!r}, {str(self)!r})"

    @property
    def path_str(self) -> str:
        """Return the path joined with ``::``."""
        return PATH_SEPARATOR.join(self.path)

    @classmethod
    def from_path(cls, path: str) -> "PublicItem":
        """Build an item whose rendering is just its path as an identifier.

        ``PublicItem.from_path("a::b")`` has path ``("a", "b")`` and a
        single identifier token ``"a::b"``.
        """
        return cls(path=tuple(path.split(PATH_SEPARATOR)), tokens=(Token.identifier(path),))

    @classmethod
    def build(cls, path: Iterable[str], tokens: Iterable[Token]) -> "PublicItem":
        """Build an item from arbitrary iterables of path segments and tokens."""
        return cls(path=tuple(path), tokens=tuple(tokens))
