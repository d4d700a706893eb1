"""
CLI: ``modelreg serve``: start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from modelreg.api.settings import RegistryAPISettings
from modelreg.cli.utils import console


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address [default: MODELREG_HOST]"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port [default: MODELREG_PORT]"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the model registry REST API server."""
    settings = RegistryAPISettings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting modelreg API[/bold green] on {host}:{port}")
    uvicorn.run(
        "modelreg.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
