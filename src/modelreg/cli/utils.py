"""
CLI utility helpers: building the registry and rendering results.

Commands run the same :class:`~modelreg.api.adapter.RequestAdapter` the REST
API uses, so a command's JSON output and success/failure match the HTTP
response for the same operation.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import typer
from rich.console import Console

from modelreg.api.adapter import AdapterResponse, ModelRequest, RequestAdapter
from modelreg.core.logging import configure_logging
from modelreg.core.settings import RegistrySettings
from modelreg.ops.registry import ModelRegistry
from modelreg.store.factory import create_store

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


# ── Registry helpers ─────────────────────────────────────────────────────


def load_settings() -> RegistrySettings:
    """Read settings from the environment and set up logging to match."""
    settings = RegistrySettings()
    configure_logging(
        level=settings.log_level,
        log_format=settings.log_format or "console",
        stream=sys.stderr,
    )
    return settings


def with_registry(call: Callable[[ModelRegistry], Awaitable[T]]) -> T:
    """Run *call* against a freshly built registry, closing the store afterwards."""
    settings = load_settings()

    async def _run() -> T:
        store = create_store(settings)
        try:
            return await call(ModelRegistry.from_settings(store, settings))
        finally:
            await store.close()

    return asyncio.run(_run())


def run_request(
    method: str,
    entity_type: str | None = None,
    body: str | None = None,
) -> AdapterResponse:
    """Dispatch one request through the adapter, as the HTTP layer would."""
    path = f"/models/{entity_type}" if entity_type else "/models"
    request = ModelRequest(method=method, entity_type=entity_type, body=body, path=path)
    return with_registry(lambda registry: RequestAdapter(registry).handle(request))


# ── Output helpers ───────────────────────────────────────────────────────


def read_body(file: Path | None) -> str:
    """Return the request body from ``--file`` or, failing that, stdin."""
    if file is not None:
        return file.read_text(encoding="utf-8")
    return typer.get_text_stream("stdin").read()


def emit(response: AdapterResponse, *, pretty: bool = False) -> None:
    """Print the response body; exit 1 when the status is an error."""
    typer.echo(response.render(pretty).decode("utf-8"))
    if response.status >= 400:
        err_console.print(f"[bold red]Error[/bold red] (HTTP {response.status})")
        raise typer.Exit(code=1)
