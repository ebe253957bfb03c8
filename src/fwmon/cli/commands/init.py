from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fwmon.cli.helpers import build_store, load_settings_or_exit
from fwmon.config import Settings, get_settings, resolve_config_path, write_settings


def register(app: typer.Typer) -> None:
    @app.command()
    def init(
        data_dir: Annotated[
            Path | None,
            typer.Option("--data-dir", "--path", help="Custom data directory"),
        ] = None,
        force: Annotated[
            bool,
            typer.Option("--force", "-f", help="Overwrite existing config and records"),
        ] = False,
    ) -> None:
        """Initialize fwmon configuration and the device record store."""
        console = Console()

        config_path, config_exists = resolve_config_path(allow_missing=True)
        if config_exists and not force:
            console.print(f"[dim]Config exists:[/dim] {config_path}")
        else:
            write_settings(Settings(), config_path)
            action = "Overwrote" if config_exists else "Created"
            console.print(f"[green]✓[/green] {action} config: {config_path}")
            get_settings.cache_clear()

        settings = load_settings_or_exit()
        store = build_store(settings, data_dir=data_dir)
        created = store.init(force=force)

        if created:
            console.print(
                f"[green]✓[/green] Initialized record store: {store.records_path}"
            )
        else:
            console.print(f"[dim]Record store exists:[/dim] {store.records_path}")
        console.print(
            f"[dim]Place the reference file at:[/dim] {settings.reference.path}"
        )
