"""Public API item model.

Exports the token and item types consumed by the diff engine and the
serializer for reading and writing item snapshots as JSON/YAML.
"""
from __future__ import annotations

from apidiff.items.errors import ItemFormatError
from apidiff.items.nodes import PATH_SEPARATOR, PublicItem
from apidiff.items.serializer import ItemSerializer, dump_items, load_items
from apidiff.items.tokens import TOKEN_KINDS, Token, TokenKind, render_tokens

__all__ = [
    # Item model
    "PublicItem",
    "PATH_SEPARATOR",
    "Token",
    "TokenKind",
    "TOKEN_KINDS",
    "render_tokens",
    # Serialization
    "ItemSerializer",
    "ItemFormatError",
    "load_items",
    "dump_items",
]
