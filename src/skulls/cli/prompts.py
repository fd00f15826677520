# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Interactive prompts, offered only when stdin is a terminal."""

from __future__ import annotations

import sys
from typing import Any

from rich.prompt import Confirm, Prompt

from skulls.cli.formatters.console import console
from skulls.core.exceptions import OperationCancelled


def is_interactive() -> bool:
    return sys.stdin.isatty()


def _parse_choice(answer: str, count: int) -> list[int] | None:
    answer = answer.strip().lower()
    if answer in ("a", "all", "*"):
        return list(range(count))
    indexes: list[int] = []
    for part in answer.replace(" ", ",").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= count:
            return None
        idx = int(part) - 1
        if idx not in indexes:
            indexes.append(idx)
    return indexes


def choose_skills(skills: list[Any], title: str = "Select skills to install") -> list[Any]:
    """Multi-select by number, e.g. ``1,3`` or ``all``."""
    console.print(f"[bold]{title}[/bold]")
    for i, skill in enumerate(skills, start=1):
        console.print(f"  [cyan]{i}[/cyan]) {skill.name} [dim]{skill.description}[/dim]")
    try:
        while True:
            answer = Prompt.ask("Skills (numbers separated by commas, or 'all')", console=console)
            chosen = _parse_choice(answer, len(skills))
            if chosen is not None:
                return [skills[i] for i in chosen]
            console.print("[red]Enter numbers from the list, or 'all'.[/red]")
    except (KeyboardInterrupt, EOFError):
        raise OperationCancelled("Selection cancelled") from None


def confirm_install(names: list[str], overwrites: list[str]) -> bool:
    console.print("[bold]Installation Summary[/bold]")
    for name in names:
        note = " [yellow]overwrites existing skill[/yellow]" if name in overwrites else ""
        console.print(f"  {name}{note}")
    try:
        return Confirm.ask("Proceed with installation?", default=True, console=console)
    except (KeyboardInterrupt, EOFError):
        raise OperationCancelled("Installation cancelled") from None


def confirm_removal(names: list[str]) -> bool:
    console.print("[bold]Skills to remove[/bold]")
    for name in names:
        console.print(f"  [red]•[/red] {name}")
    try:
        return Confirm.ask(f"Remove {len(names)} skill(s)?", default=False, console=console)
    except (KeyboardInterrupt, EOFError):
        raise OperationCancelled("Removal cancelled") from None
