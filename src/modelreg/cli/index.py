"""
CLI: ``modelreg index``: models index maintenance.
"""

from __future__ import annotations

import typer

from modelreg.cli.utils import console, err_console, with_registry
from modelreg.core.errors import InfrastructureError, StoreError
from modelreg.ops.registry import ModelRegistry

app = typer.Typer(no_args_is_help=True)


@app.command("ensure")
def ensure() -> None:
    """Create the models index if it does not exist."""
    try:
        index, created = with_registry(_ensure)
    except (InfrastructureError, StoreError) as exc:
        err_console.print(f"[bold red]Error[/bold red]: {exc.message}")
        raise typer.Exit(code=1) from exc

    if created:
        console.print(f"[green]Created[/green] index {index}")
    else:
        console.print(f"Index {index} already exists")


async def _ensure(registry: ModelRegistry) -> tuple[str, bool]:
    return registry.index, await registry.locations.ensure_exists()
