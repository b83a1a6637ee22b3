"""Command-line interface for inspecting structure item layouts."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from bitlayout.item import StructureItem, ValidationError

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Bitlayout structure item tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="JSON file of structure items")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def check(input_file: str, output_json: bool) -> None:
    """Validate structure items and display them in layout order."""
    with open(input_file, encoding="utf-8") as f:
        try:
            entries = json.load(f)
        except json.JSONDecodeError as e:
            raise click.UsageError(f"{input_file} is not valid JSON: {e}") from e

    if not isinstance(entries, list):
        raise click.UsageError(f"{input_file} must contain a JSON array of structure items")

    items, errors = _load_items(entries)
    items.sort()
    coincident = _find_coincident(items)

    if output_json:
        _output_json(items, coincident, errors)
    else:
        _output_plain(items, coincident, errors)

    if errors:
        sys.exit(1)


def _load_items(entries: list[Any]) -> tuple[list[StructureItem], list[str]]:
    """Build items from snapshot mappings, collecting failures by index."""
    items: list[StructureItem] = []
    errors: list[str] = []

    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"[{index}] expected an object but got {type(entry).__name__}")
            continue
        try:
            items.append(StructureItem.from_hash(entry))
        except ValidationError as e:
            logger.debug("Rejected entry %d: %s", index, e)
            errors.append(f"[{index}] {e}")

    return items, errors


def _find_coincident(items: list[StructureItem]) -> list[tuple[str, str]]:
    """Return name pairs of neighbouring items that occupy the same slot."""
    return [(a.name, b.name) for a, b in zip(items, items[1:]) if a == b]


def _format_array(array_size: int | None) -> str:
    """Format an array size, handling None for scalars and negatives for open arrays."""
    if array_size is None:
        return ""
    if array_size < 0:
        return f"rest{array_size}"
    return str(array_size)


def _output_json(
    items: list[StructureItem],
    coincident: list[tuple[str, str]],
    errors: list[str],
) -> None:
    """Output checked items as JSON."""
    data: dict = {
        "items": [item.to_hash() for item in items],
        "coincident": [list(pair) for pair in coincident],
        "errors": errors,
    }

    print(json.dumps(data, indent=2))


def _output_plain(
    items: list[StructureItem],
    coincident: list[tuple[str, str]],
    errors: list[str],
) -> None:
    """Output checked items using rich text formatting."""
    console = Console()

    console.print("[bold cyan]Items[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Name", style="white")
    table.add_column("Offset", style="yellow", justify="right")
    table.add_column("Size", style="yellow", justify="right")
    table.add_column("Type", style="green")
    table.add_column("Endianness", style="dim")
    table.add_column("Array", justify="right")
    table.add_column("Overflow", style="dim")

    for item in items:
        table.add_row(
            escape(item.name),
            str(item.bit_offset),
            str(item.bit_size),
            item.data_type.name,
            item.endianness.name,
            _format_array(item.array_size),
            item.overflow.name,
        )

    console.print(table)

    if coincident:
        console.print()
        console.print("[bold yellow]Coincident[/bold yellow]")
        for first, second in coincident:
            console.print(f"  {escape(first)} and {escape(second)} occupy the same bits")

    if errors:
        console.print()
        console.print("[bold red]Errors[/bold red]")
        for error in errors:
            console.print(f"  {error}", markup=False)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
