# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Run async command bodies and map errors to exit codes."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer
from rich.markup import escape

from skulls.cli.formatters.console import console
from skulls.core.exceptions import GitCloneError, OperationCancelled, SkullsError

T = TypeVar("T")


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run *coro*; cancellation exits 0, any other SkullsError exits 1."""
    try:
        return asyncio.run(coro)
    except OperationCancelled as exc:
        console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        raise typer.Exit(0) from None
    except GitCloneError as exc:
        console.print("[red]Failed to clone repository[/red]")
        for line in str(exc).splitlines():
            console.print(f"[dim]{escape(line)}[/dim]")
        raise typer.Exit(1) from None
    except SkullsError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None
