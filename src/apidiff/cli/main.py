"""CLI entry point for apidiff.

Invoked as::

    apidiff [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m apidiff.cli.main

Commands
--------
diff        Compare two public API snapshot files
show        Print the items of a snapshot file
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from apidiff.diff.report import DiffReport
    from apidiff.items.nodes import PublicItem

console = Console()
err_console = Console(stderr=True)


def _load_or_exit(path: str) -> list["PublicItem"]:
    """Load a snapshot file, printing errors and exiting on failure."""
    from apidiff.items import ItemFormatError, load_items

    try:
        return load_items(path)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {escape(path)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(exc))}")
        sys.exit(1)
    except ItemFormatError as exc:
        err_console.print(f"[red]Invalid snapshot[/red] {escape(str(exc))}")
        sys.exit(1)


def _print_report(report: "DiffReport") -> None:
    """Print a report as coloured -/±/+ lines grouped by category."""
    colors = {"removed": "red", "changed": "yellow", "added": "green"}
    for category in ("removed", "changed", "added"):
        entries = report.by_category(category)
        if not entries:
            continue
        console.print(f"[bold]{category.capitalize()}:[/bold]")
        color = colors[category]
        for entry in entries:
            if category == "changed":
                console.print(f"[red]-{escape(str(entry.old))}[/red]")
                console.print(f"[green]+{escape(str(entry.new))}[/green]")
            else:
                item = entry.old if category == "removed" else entry.new
                console.print(f"[{color}]{entry.marker}{escape(str(item))}[/{color}]")
        console.print()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="apidiff")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Structural diffing of public API snapshots."""
    if verbose:
        handler = RichHandler(console=err_console, show_time=False, show_path=False)
        root = logging.getLogger("apidiff")
        root.setLevel(logging.DEBUG)
        if not any(isinstance(h, RichHandler) for h in root.handlers):
            root.addHandler(handler)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show the tool version and the snapshot format it reads."""
    from apidiff import __version__
    from apidiff.diff.report import CATEGORIES
    from apidiff.items.serializer import DOCUMENT_KIND
    from apidiff.items.tokens import TOKEN_KINDS

    table = Table(show_header=False, box=None)
    table.add_row("[bold]apidiff[/bold]", f"v{__version__}")
    table.add_row("Snapshot kind", DOCUMENT_KIND)
    table.add_row("Snapshot formats", "json, yaml")
    table.add_row("Token kinds", ", ".join(sorted(TOKEN_KINDS)))
    table.add_row("Deny categories", ", ".join(CATEGORIES))
    console.print(table)


# ---------------------------------------------------------------------------
# diff command
# ---------------------------------------------------------------------------


@cli.command(name="diff")
@click.argument("old", type=click.Path(exists=False))
@click.argument("new", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"], case_sensitive=False),
    default="text",
    help="Output format",
)
@click.option(
    "--deny",
    multiple=True,
    type=click.Choice(["all", "added", "changed", "removed"], case_sensitive=False),
    help="Exit with status 1 if the diff contains this category. May be repeated.",
)
def diff_command(old: str, new: str, output_format: str, deny: tuple[str, ...]) -> None:
    """Compare two public API snapshot files.

    OLD and NEW are paths to JSON or YAML snapshot files.
    """
    from apidiff.diff import DenyPolicy, between, build_report

    old_items = _load_or_exit(old)
    new_items = _load_or_exit(new)

    result = between(old_items, new_items)
    report = build_report(result, old, new)
    policy = DenyPolicy.parse(deny)

    output_format = output_format.lower()
    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    elif output_format == "yaml":
        click.echo(yaml.dump(report.to_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False))
    elif result.is_empty():
        console.print("[green]No public API changes between the two snapshots.[/green]")
    else:
        console.print(f"[bold]Public API diff:[/bold] {escape(old)} → {escape(new)}\n")
        _print_report(report)
        console.print(
            f"[bold]{len(report.entries)}[/bold] change(s) total: "
            f"{report.removed_count} removed, {report.changed_count} changed, "
            f"{report.added_count} added (requires {report.required_bump} bump)"
        )

    violations = policy.violations(result)
    if violations:
        err_console.print(
            f"[red]Denied:[/red] diff contains {', '.join(violations)} item(s)"
        )
        sys.exit(1)


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("file", type=click.Path(exists=False))
@click.option("--sort", "sort_items", is_flag=True, default=False, help="Sort items before printing")
def show_command(file: str, sort_items: bool) -> None:
    """Print every item of a snapshot file.

    FILE is the path to a JSON or YAML snapshot file.
    """
    items = _load_or_exit(file)
    if sort_items:
        items = sorted(items)
    for item in items:
        console.print(escape(str(item)), highlight=False)
    console.print(f"\n[bold]{len(items)}[/bold] item(s)")


if __name__ == "__main__":
    cli()
