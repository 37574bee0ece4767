"""CLI commands for the watch catalog."""

from __future__ import annotations

import asyncio

import click
from rich import get_console
from sqlspec.extensions.litestar.cli import database_group as database_management_group


@database_management_group.command(name="load-fixtures", help="Load the bundled watch catalog into the database.")  # type: ignore[misc]
@click.option("--list", "list_fixtures", is_flag=True, help="List the watches in the fixture file")
@click.option("--append", is_flag=True, help="Keep existing catalog rows instead of replacing them")
def load_fixtures_cmd(list_fixtures: bool, append: bool) -> None:
    """Load the bundled watch catalog into the database."""
    if list_fixtures:
        _display_fixture_list()
        return

    _load_fixture_data(replace=not append)


def _display_fixture_list() -> None:
    """Display the watches in the fixture file."""
    from pathlib import Path

    from rich.table import Table

    from chronoelite.db.utils import WATCH_FIXTURE_FILE, read_watch_fixtures
    from chronoelite.lib.settings import get_settings

    console = get_console()
    fixtures_dir = Path(get_settings().db.FIXTURE_PATH)
    console.rule(f"[bold blue]{fixtures_dir / WATCH_FIXTURE_FILE}", style="blue", align="left")
    console.print()

    watches = read_watch_fixtures(fixtures_dir)
    if not watches:
        console.print("[yellow]The fixture file has no watches[/yellow]")
        return

    table = Table(show_header=True, header_style="bold blue", expand=True)
    table.add_column("Name", style="cyan", ratio=3)
    table.add_column("Category", ratio=2)
    table.add_column("Price", justify="right", ratio=1)
    table.add_column("Images", justify="right", ratio=1)
    for watch in watches:
        table.add_row(watch.name, watch.category, f"{watch.price / 100:.2f}", str(len(watch.images)))

    console.print(table)
    console.print()


def _load_fixture_data(*, replace: bool) -> None:
    """Load fixture data into database."""
    from rich.table import Table

    from chronoelite.db.utils import load_fixtures

    console = get_console()
    console.rule("[bold blue]Loading Watch Catalog", style="blue", align="left")
    console.print()
    if replace:
        console.print("[dim]Existing catalog rows will be replaced[/dim]")
    console.print()

    with console.status("[bold yellow]Loading fixtures...", spinner="dots"):
        counts = asyncio.run(load_fixtures(replace=replace))

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Table", style="cyan", width=20)
    table.add_column("Rows", justify="right", width=10)
    for table_name, count in counts.items():
        table.add_row(table_name, str(count) if count else "[dim]0[/dim]")

    console.print(table)
    console.print()
    console.print(f"[green]✓ Loaded {counts['watches']} watches[/green]")
