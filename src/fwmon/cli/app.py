from __future__ import annotations

from typing import Annotated

import typer

from fwmon.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands import records as records_cmd
from .commands import reference as reference_cmd
from .commands.check import register as register_check
from .commands.init import register as register_init
from .commands.schedule import register as register_schedule
from .commands.serve import register as register_serve

app = typer.Typer(
    help="fwmon - firmware version monitor for device fleets", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config", help="Show or create configuration")
app.add_typer(records_cmd.app, name="records", help="Inspect the device record store")
app.add_typer(reference_cmd.app, name="reference", help="Inspect the reference file")

register_init(app)
register_check(app)
register_schedule(app)
register_serve(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """fwmon CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"fwmon version {get_version('fwmon')}")
        raise typer.Exit()
