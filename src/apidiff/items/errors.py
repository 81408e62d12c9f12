"""Error types for reading item snapshots.

Errors carry the location inside the document where the problem was
found so that the CLI can print a precise, actionable message.
"""
from __future__ import annotations


class ItemFormatError(ValueError):
    """Raised when a snapshot document does not describe a list of items.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    location:
        Dotted/indexed location inside the document, e.g.
        ``"items[3].tokens[0].kind"``.  Empty for document-level errors.
    source:
        Name of the file the document was read from, if any.
    """

    def __init__(self, message: str, location: str = "", source: str | None = None) -> None:
        self.message = message
        self.location = location
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        where = ""
        if self.source:
            where = f"{self.source}: "
        if self.location:
            where = f"{where}{self.location}: "
        return f"{where}{self.message}"

    def with_source(self, source: str) -> "ItemFormatError":
        """Return a copy of this error annotated with the originating file name."""
        return ItemFormatError(self.message, location=self.location, source=source)
