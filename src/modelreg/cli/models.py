"""
CLI: ``modelreg models``: entity model CRUD against the configured store.
"""

from __future__ import annotations

from pathlib import Path

import typer

from modelreg.cli.utils import emit, read_body, run_request

app = typer.Typer(no_args_is_help=True)

_PRETTY = typer.Option(False, "--pretty", help="Indent the JSON output.")
_FILE = typer.Option(
    None,
    "--file",
    "-f",
    exists=True,
    dir_okay=False,
    readable=True,
    help="Read the model from this file instead of stdin.",
)


@app.command("list")
def list_models(pretty: bool = _PRETTY) -> None:
    """List every entity model."""
    emit(run_request("GET"), pretty=pretty)


@app.command("get")
def get_model(
    entity_type: str = typer.Argument(..., help="Entity type"),
    pretty: bool = _PRETTY,
) -> None:
    """Show the model for one entity type."""
    emit(run_request("GET", entity_type), pretty=pretty)


@app.command("create")
def create_model(
    entity_type: str = typer.Argument(..., help="Entity type"),
    file: Path | None = _FILE,
    pretty: bool = _PRETTY,
) -> None:
    """Create a model; fails if one already exists for the entity type."""
    emit(run_request("POST", entity_type, read_body(file)), pretty=pretty)


@app.command("update")
def update_model(
    entity_type: str = typer.Argument(..., help="Entity type"),
    file: Path | None = _FILE,
    pretty: bool = _PRETTY,
) -> None:
    """Create or replace the model for an entity type."""
    emit(run_request("PUT", entity_type, read_body(file)), pretty=pretty)


@app.command("delete")
def delete_model(
    entity_type: str = typer.Argument(..., help="Entity type"),
    pretty: bool = _PRETTY,
) -> None:
    """Delete the model for an entity type."""
    emit(run_request("DELETE", entity_type), pretty=pretty)
