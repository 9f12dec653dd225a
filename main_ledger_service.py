"""Mini README: Entry point CLI for the daily ledger service.

This script exposes a Typer CLI that starts the FastAPI application with a
configurable host and port and prints the confirmation phrases administrators
need for the reset operations in the configured locale.
"""

from __future__ import annotations

import typer
import uvicorn

from dailyledger.configuration import get_settings
from dailyledger.logging_utils import configure_root_logger
from dailyledger.messages import translate

cli = typer.Typer(help="Run and inspect the daily ledger backend.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger()

    # 0.0.0.0 is a bind address only; browsers need a concrete host.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    storage = str(settings.storage_path) if settings.storage_path else "in-memory (data is lost on exit)"
    typer.echo(
        f"Starting daily ledger on {effective_host}:{effective_port} with storage {storage}.\n"
        f"API docs: http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "dailyledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not (production or settings.is_production),
    )


@cli.command("reset-phrases")
def reset_phrases() -> None:
    """Print the confirmation phrases required by the reset operations."""

    typer.echo(f"Complete system reset: {translate('complete_reset_phrase')}")
    typer.echo(f"Data-only reset:       {translate('data_reset_phrase')}")


if __name__ == "__main__":
    cli()
