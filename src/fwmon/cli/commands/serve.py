from __future__ import annotations

from typing import Annotated

import typer
import uvicorn

from fwmon.cli.helpers import load_settings_or_exit
from fwmon.server import create_app
from fwmon.storage import open_store


def register(app: typer.Typer) -> None:
    @app.command()
    def serve(
        host: Annotated[
            str | None, typer.Option("--host", help="Bind address")
        ] = None,
        port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
    ) -> None:
        """Serve the record upsert endpoint (POST /save)."""
        settings = load_settings_or_exit()
        store = open_store(settings)

        uvicorn.run(
            create_app(store),
            host=host or settings.server.host,
            port=port or settings.server.port,
            log_config=None,
        )
