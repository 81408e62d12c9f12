"""Shared fixtures for the apidiff test suite.

``snapshot_files`` writes a small pair of JSON snapshots that differ in
one removed, one changed and one added item; the CLI and quickstart
tests diff them end to end.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from apidiff.items import PublicItem, Token, dump_items


@pytest.fixture()
def package_name() -> str:
    """Name the quickstart test expects ``import apidiff`` to report."""
    return "apidiff"


@pytest.fixture()
def expected_version() -> str:
    """Release string ``apidiff.__version__`` is expected to report."""
    return "0.1.0"


def fn_item(path: str, param_type: str) -> PublicItem:
    """Build ``pub fn a::b(x: <param_type>)`` with path ``a::b``."""
    segments = path.split("::")
    tokens = [
        Token.qualifier("pub"),
        Token.whitespace(),
        Token.kind_("fn"),
        Token.whitespace(),
    ]
    for i, segment in enumerate(segments):
        if i:
            tokens.append(Token.symbol("::"))
        tokens.append(Token.function(segment) if i == len(segments) - 1 else Token.identifier(segment))
    tokens.extend(
        [
            Token.symbol("("),
            Token.identifier("x"),
            Token.symbol(":"),
            Token.whitespace(),
            Token.primitive(param_type),
            Token.symbol(")"),
        ]
    )
    return PublicItem(path=tuple(segments), tokens=tuple(tokens))


@pytest.fixture()
def snapshot_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write an old and a new JSON snapshot of a tiny crate and return both paths."""
    old = [
        PublicItem.from_path("lib::keep"),
        PublicItem.from_path("lib::gone"),
        fn_item("lib::f", "i32"),
    ]
    new = [
        PublicItem.from_path("lib::keep"),
        PublicItem.from_path("lib::fresh"),
        fn_item("lib::f", "i64"),
    ]
    old_path = tmp_path / "old.json"
    new_path = tmp_path / "new.json"
    dump_items(old, old_path)
    dump_items(new, new_path)
    return old_path, new_path
