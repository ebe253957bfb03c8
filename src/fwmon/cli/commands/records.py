from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from fwmon.cli.helpers import build_store, fail, load_settings_or_exit
from fwmon.errors import FwmonError

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_records() -> None:
    """List stored device records."""
    settings = load_settings_or_exit()
    store = build_store(settings)
    try:
        records = store.load_records()
    except FwmonError as exc:
        raise fail(exc) from exc

    console = Console()

    if not records:
        console.print("No device records stored.")
        console.print(
            f"Use 'fwmon records add' or 'fwmon serve' to populate {store.records_path}"
        )
        return

    table = Table()
    table.add_column("Serial", style="cyan")
    table.add_column("Firmware", style="green")
    table.add_column("Last check")

    for record in records:
        table.add_row(record.serial, record.firmware or "", record.date or "")

    console.print(table)


@app.command("add")
def add_record(
    serial: str = typer.Argument(..., help="Device serial number"),
    firmware: str = typer.Argument(..., help="Installed firmware version"),
    date: str | None = typer.Option(None, "--date", help="When it was read"),
) -> None:
    """Add or update the record for a serial."""
    serial = serial.strip()
    if not serial:
        typer.echo("Serial must not be blank", err=True)
        raise typer.Exit(1)

    settings = load_settings_or_exit()
    store = build_store(settings)
    try:
        created = store.upsert(serial, firmware, date)
    except FwmonError as exc:
        raise fail(exc) from exc

    console = Console()
    action = "Added" if created else "Updated"
    console.print(f"[green]✓[/green] {action} '{serial}' → {firmware}")
