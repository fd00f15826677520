# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from skulls import __version__
from skulls.cli.commands.add import add_command
from skulls.cli.commands.find import find_command
from skulls.cli.commands.init import init_command
from skulls.cli.commands.list_skills import list_command
from skulls.cli.commands.remove import remove_command
from skulls.cli.commands.updates import check_command, update_command
from skulls.core.config import get_settings
from skulls.core.logging import setup_logging

app = typer.Typer(
    name="skulls",
    help="Package manager for agent skills (SKILL.md)",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"skulls {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress to stderr")
    ] = False,
) -> None:
    settings = get_settings()
    setup_logging("INFO" if verbose else settings.log_level, settings.log_format)


app.command(name="add")(add_command)
app.command(name="remove")(remove_command)
app.command(name="list")(list_command)
app.command(name="find")(find_command)
app.command(name="init")(init_command)
app.command(name="check")(check_command)
app.command(name="update")(update_command)

# Short aliases
for alias in ("a", "i", "install"):
    app.command(name=alias, hidden=True)(add_command)
for alias in ("rm", "r"):
    app.command(name=alias, hidden=True)(remove_command)
app.command(name="ls", hidden=True)(list_command)
for alias in ("search", "f", "s"):
    app.command(name=alias, hidden=True)(find_command)
app.command(name="upgrade", hidden=True)(update_command)


@app.command()
def version() -> None:
    """Show the skulls version."""
    typer.echo(f"skulls {__version__}")


if __name__ == "__main__":
    app()
