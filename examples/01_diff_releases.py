#!/usr/bin/env python3
"""Example: diffing two releases of a public API

Builds two small public API snapshots in memory, diffs them and prints
the classified result, a semver summary and a CI-style deny check.

Usage:
    python examples/01_diff_releases.py

Requirements:
    pip install apidiff
"""
from __future__ import annotations

import apidiff
from apidiff.diff import DenyPolicy
from apidiff.items import PublicItem, Token


def fn(path: str, param_type: str) -> PublicItem:
    segments = path.split("::")
    tokens = [Token.qualifier("pub"), Token.whitespace(), Token.kind_("fn"), Token.whitespace()]
    tokens.append(Token.function(path))
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
    return PublicItem.build(segments, tokens)


V1 = [
    PublicItem.from_path("geom"),
    fn("geom::area", "f32"),
    fn("geom::scale", "i8"),
    fn("geom::scale", "i32"),
    fn("geom::legacy", "u8"),
]

V2 = [
    PublicItem.from_path("geom"),
    fn("geom::area", "f64"),
    fn("geom::scale", "u8"),  # new overload; the existing ones are unchanged
    fn("geom::scale", "i8"),
    fn("geom::scale", "i32"),
    fn("geom::perimeter", "f64"),
]


def main() -> None:
    print(f"apidiff version: {apidiff.__version__}")

    result = apidiff.between(V1, V2)

    print("\nRemoved:")
    for item in result.removed:
        print(f"  -{item}")
    print("Changed:")
    for change in result.changed:
        print(f"  -{change.old}")
        print(f"  +{change.new}")
    print("Added:")
    for item in result.added:
        print(f"  +{item}")

    report = apidiff.report(result, "1.0.0", "2.0.0")
    print()
    print(report.summary())

    policy = DenyPolicy.parse(["removed"])
    violations = policy.violations(result)
    print(f"\nDeny check (removed): {'FAIL' if violations else 'ok'}")

    # Diffing a snapshot against itself is always empty
    assert apidiff.between(V2, list(reversed(V2))).is_empty()


if __name__ == "__main__":
    main()
