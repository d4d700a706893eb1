"""
Root Typer application for the ``modelreg`` CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from modelreg import __version__
from modelreg.cli.index import app as index_app
from modelreg.cli.models import app as models_app
from modelreg.cli.serve import serve

app = Typer(
    name="modelreg",
    help="modelreg: entity model registry for entity resolution.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"modelreg {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """modelreg CLI: manage entity models and serve the registry API."""


# ── Sub-command registration ─────────────────────────────────────────────

app.command("serve", help="Start the API server.")(serve)
app.add_typer(models_app, name="models", help="Entity model CRUD.")
app.add_typer(index_app, name="index", help="Models index maintenance.")
