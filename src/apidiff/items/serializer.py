"""Snapshot serialization for public API items.

Provides round-trip serialization of item lists to and from JSON and
YAML.  The serialized form is a plain dict/list structure that maps
naturally to both formats::

    kind: PublicApi
    items:
      - path: [mycrate, add]
        tokens:
          - {kind: qualifier, text: pub}
          - {kind: whitespace, text: " "}
          - {kind: kind, text: fn}
          ...

A bare list of item dicts is also accepted on input.

Usage
-----
::

    from apidiff.items.serializer import ItemSerializer

    serializer = ItemSerializer()
    text = serializer.to_json(items)
    items2 = serializer.from_json(text)
    assert items == items2
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import yaml

from apidiff.items.errors import ItemFormatError
from apidiff.items.nodes import PublicItem
from apidiff.items.tokens import TOKEN_KINDS, Token

logger = logging.getLogger(__name__)

DOCUMENT_KIND = "PublicApi"
_YAML_SUFFIXES = frozenset({".yml", ".yaml"})


class ItemSerializer:
    """Converts between lists of ``PublicItem`` objects and plain Python data.

    Item order is preserved in both directions, and so are duplicates.
    """

    # ------------------------------------------------------------------
    # Serialization (items → dict)
    # ------------------------------------------------------------------

    def to_dict(self, items: Iterable[PublicItem]) -> dict[str, object]:
        """Serialize ``items`` to a JSON-compatible dict."""
        return {
            "kind": DOCUMENT_KIND,
            "items": [self.item_to_dict(item) for item in items],
        }

    def item_to_dict(self, item: PublicItem) -> dict[str, object]:
        return {
            "path": list(item.path),
            "tokens": [self._token_to_dict(t) for t in item.tokens],
        }

    def _token_to_dict(self, token: Token) -> dict[str, str]:
        return {"kind": token.kind.name.lower(), "text": token.text}

    # ------------------------------------------------------------------
    # Deserialization (dict → items)
    # ------------------------------------------------------------------

    def from_dict(self, data: object) -> list[PublicItem]:
        """Deserialize a list of items from a document or a bare list.

        Raises
        ------
        ItemFormatError
            If ``data`` does not have the expected shape.
        """
        if isinstance(data, list):
            raw_items = data
        elif isinstance(data, dict):
            kind = data.get("kind", DOCUMENT_KIND)
            if kind != DOCUMENT_KIND:
                raise ItemFormatError(
                    f"Unknown document kind {kind!r}, expected {DOCUMENT_KIND!r}", "kind"
                )
            if "items" not in data:
                raise ItemFormatError("Missing 'items' list", "items")
            raw_items = data["items"]
            if not isinstance(raw_items, list):
                raise ItemFormatError("Expected a list of items", "items")
        else:
            raise ItemFormatError(
                f"Expected a mapping or a list at document root, got {type(data).__name__}"
            )
        items = [self._item_from_dict(d, f"items[{i}]") for i, d in enumerate(raw_items)]
        logger.debug("Deserialized %d item(s)", len(items))
        return items

    def _item_from_dict(self, d: object, location: str) -> PublicItem:
        if not isinstance(d, dict):
            raise ItemFormatError("Expected an item mapping", location)
        path = d.get("path")
        if isinstance(path, str):
            path = path.split("::")
        if not isinstance(path, list) or not all(isinstance(p, str) for p in path):
            raise ItemFormatError("Expected a list of path segments", f"{location}.path")
        tokens = d.get("tokens")
        if not isinstance(tokens, list):
            raise ItemFormatError("Expected a list of tokens", f"{location}.tokens")
        return PublicItem(
            path=tuple(path),
            tokens=tuple(
                self._token_from_dict(t, f"{location}.tokens[{i}]") for i, t in enumerate(tokens)
            ),
        )

    def _token_from_dict(self, d: object, location: str) -> Token:
        if not isinstance(d, dict):
            raise ItemFormatError("Expected a token mapping", location)
        kind_name = d.get("kind")
        kind = TOKEN_KINDS.get(str(kind_name).lower())
        if kind is None:
            raise ItemFormatError(f"Unknown token kind {kind_name!r}", f"{location}.kind")
        text = d.get("text")
        if not isinstance(text, str):
            raise ItemFormatError("Expected token text to be a string", f"{location}.text")
        return Token(kind=kind, text=text)

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, items: Iterable[PublicItem], indent: int = 2) -> str:
        """Serialize ``items`` to a JSON string."""
        return json.dumps(self.to_dict(items), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> list[PublicItem]:
        """Deserialize items from a JSON string."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ItemFormatError(f"Invalid JSON: {exc.msg}", f"line {exc.lineno}") from exc
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, items: Iterable[PublicItem]) -> str:
        """Serialize ``items`` to a YAML string."""
        return yaml.dump(self.to_dict(items), default_flow_style=False, allow_unicode=True)

    def from_yaml(self, text: str) -> list[PublicItem]:
        """Deserialize items from a YAML string."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ItemFormatError(f"Invalid YAML: {exc}") from exc
        if data is None:
            return []
        return self.from_dict(data)


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in _YAML_SUFFIXES


def load_items(path: str | Path) -> list[PublicItem]:
    """Read a snapshot file and return its items.

    Files ending in ``.yml`` / ``.yaml`` are parsed as YAML, everything
    else as JSON.

    Raises
    ------
    OSError
        If the file cannot be read.
    ItemFormatError
        If the file is not UTF-8 text or not a valid snapshot.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ItemFormatError("File is not valid UTF-8", source=str(path)) from exc
    serializer = ItemSerializer()
    try:
        items = serializer.from_yaml(text) if _is_yaml(path) else serializer.from_json(text)
    except ItemFormatError as exc:
        raise exc.with_source(str(path)) from exc
    logger.debug("Loaded %d item(s) from %s", len(items), path)
    return items


def dump_items(items: Iterable[PublicItem], path: str | Path) -> None:
    """Write ``items`` to a snapshot file, choosing the format from the suffix."""
    path = Path(path)
    serializer = ItemSerializer()
    text = serializer.to_yaml(items) if _is_yaml(path) else serializer.to_json(items)
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote snapshot to %s", path)
