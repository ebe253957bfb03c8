from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from fwmon.cli.helpers import fail, load_settings_or_exit
from fwmon.config import reference_path_from_settings
from fwmon.core.reference import (
    build_reference_table,
    reference_entries,
    rows_from_config,
)
from fwmon.errors import FwmonError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_reference() -> None:
    """Show the expected version for each serial in the reference file."""
    settings = load_settings_or_exit()
    path = reference_path_from_settings(settings)
    try:
        table_data = build_reference_table(rows_from_config(path, settings.reference))
    except FwmonError as exc:
        raise fail(exc) from exc

    console = Console()
    table = Table()
    table.add_column("Serial", style="cyan")
    table.add_column("Expected version", style="green")

    for entry in reference_entries(table_data):
        table.add_row(entry.serial, entry.expected_version)

    console.print(table)
    console.print(f"\n{len(table_data)} serial(s) in {path}")
