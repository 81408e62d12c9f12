"""Token definitions for rendered public API items.

Every public item is rendered as a sequence of ``Token`` values.  The
token kind records what role a piece of text plays in the rendering
(keyword, identifier, type, punctuation, ...) so that downstream
printers can colour the output.  Tokens are immutable, hashable and
totally ordered, which lets items built from them be counted in bags
and sorted deterministically.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering


class TokenKind(Enum):
    """Exhaustive enumeration of token kinds.

    Declaration order is significant: it is the primary sort key of
    ``Token``.
    """

    SYMBOL = auto()
    QUALIFIER = auto()
    KIND = auto()
    WHITESPACE = auto()
    IDENTIFIER = auto()
    ANNOTATION = auto()
    SELF = auto()
    FUNCTION = auto()
    LIFETIME = auto()
    KEYWORD = auto()
    GENERIC = auto()
    PRIMITIVE = auto()
    TYPE = auto()


@total_ordering
@dataclass(frozen=True, slots=True)
class Token:
    """A single piece of an item's rendering.

    Parameters
    ----------
    kind:
        The ``TokenKind`` variant for this token.
    text:
        The text as it appears in the rendered item.
    """

    kind: TokenKind
    text: str

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r})"

    def __str__(self) -> str:
        return self.text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind.value, self.text) < (other.kind.value, other.text)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def symbol(cls, text: str) -> "Token":
        """Punctuation such as ``::``, ``(`` or ``->``."""
        return cls(TokenKind.SYMBOL, text)

    @classmethod
    def qualifier(cls, text: str) -> "Token":
        """Visibility or other qualifier, e.g. ``pub``."""
        return cls(TokenKind.QUALIFIER, text)

    @classmethod
    def kind_(cls, text: str) -> "Token":
        """Item kind, e.g. ``fn``, ``struct`` or ``mod``."""
        return cls(TokenKind.KIND, text)

    @classmethod
    def whitespace(cls) -> "Token":
        return cls(TokenKind.WHITESPACE, " ")

    @classmethod
    def identifier(cls, text: str) -> "Token":
        return cls(TokenKind.IDENTIFIER, text)

    @classmethod
    def annotation(cls, text: str) -> "Token":
        return cls(TokenKind.ANNOTATION, text)

    @classmethod
    def self_(cls, text: str) -> "Token":
        return cls(TokenKind.SELF, text)

    @classmethod
    def function(cls, text: str) -> "Token":
        return cls(TokenKind.FUNCTION, text)

    @classmethod
    def lifetime(cls, text: str) -> "Token":
        return cls(TokenKind.LIFETIME, text)

    @classmethod
    def keyword(cls, text: str) -> "Token":
        return cls(TokenKind.KEYWORD, text)

    @classmethod
    def generic(cls, text: str) -> "Token":
        return cls(TokenKind.GENERIC, text)

    @classmethod
    def primitive(cls, text: str) -> "Token":
        return cls(TokenKind.PRIMITIVE, text)

    @classmethod
    def type_(cls, text: str) -> "Token":
        return cls(TokenKind.TYPE, text)


# Mapping from serialized kind name to its TokenKind.
TOKEN_KINDS: dict[str, TokenKind] = {kind.name.lower(): kind for kind in TokenKind}


def render_tokens(tokens: Iterable[Token]) -> str:
    """Concatenate the text of ``tokens`` into a single display string."""
    return "".join(token.text for token in tokens)
