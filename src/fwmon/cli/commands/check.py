from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from fwmon.cli.helpers import fail, load_settings_or_exit
from fwmon.errors import FwmonError
from fwmon.models import CheckOutcome
from fwmon.notify import Mailer
from fwmon.services import run_check
from fwmon.storage import open_store


def print_outcome(console: Console, outcome: CheckOutcome) -> None:
    console.print(
        f"Reference entries: {outcome.reference_count}  "
        f"Device records: {outcome.record_count}"
    )

    if not outcome.payload.count:
        console.print("[green]✓[/green] All known devices are up to date")
        return

    table = Table()
    table.add_column("Serial", style="cyan")
    table.add_column("Current", style="red")
    table.add_column("Expected", style="green")
    table.add_column("Last check")
    for serial, current, expected, last_check in outcome.payload.entries:
        table.add_row(serial, current or "", expected, last_check or "")

    console.print(table)
    console.print(f"\n[yellow]{outcome.payload.count} device(s) outdated[/yellow]")
    if outcome.notified:
        console.print("[green]✓[/green] Report e-mailed")


def register(app: typer.Typer) -> None:
    @app.command()
    def check(
        dry_run: Annotated[
            bool,
            typer.Option("--dry-run", help="Report outdated devices without e-mail"),
        ] = False,
    ) -> None:
        """Compare stored firmware against the reference file now."""
        settings = load_settings_or_exit()
        console = Console()

        try:
            store = open_store(settings)
            notifier = None if dry_run else Mailer(settings.email)
            outcome = asyncio.run(run_check(settings, store, notifier, dry_run))
        except FwmonError as exc:
            raise fail(exc) from exc

        print_outcome(console, outcome)
