from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console

from fwmon.cli.commands.check import print_outcome
from fwmon.cli.helpers import fail, load_settings_or_exit
from fwmon.errors import FwmonError
from fwmon.notify import Mailer
from fwmon.scheduler import describe, run_forever
from fwmon.services import run_check
from fwmon.storage import open_store


def register(app: typer.Typer) -> None:
    @app.command()
    def schedule(
        now: Annotated[
            bool,
            typer.Option("--now", help="Run a single check immediately and exit"),
        ] = False,
    ) -> None:
        """Run the firmware check on the configured weekly schedule."""
        settings = load_settings_or_exit()
        store = open_store(settings)
        mailer = Mailer(settings.email)
        console = Console()

        async def job() -> None:
            outcome = await run_check(settings, store, mailer)
            print_outcome(console, outcome)

        if now:
            try:
                asyncio.run(job())
            except FwmonError as exc:
                raise fail(exc) from exc
            return

        console.print(f"Checks scheduled for {describe(settings.schedule)}")
        try:
            asyncio.run(run_forever(job, settings.schedule))
        except KeyboardInterrupt:
            console.print("Stopped.")
