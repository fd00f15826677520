# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls remove``: delete installed skills."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from skulls.cli.formatters.console import console, format_remove_results
from skulls.cli.prompts import choose_skills, confirm_removal, is_interactive
from skulls.core.config import get_settings
from skulls.core.exceptions import OperationCancelled
from skulls.install.installer import installed_dir_names, list_installed_skills
from skulls.lock.store import LockStore
from skulls.models.skill import InstalledSkill
from skulls.pipeline.remove import match_installed, remove_skills


def _removal_choices(dir_names: list[str], target: Path) -> list[InstalledSkill]:
    parsed = {s.dir_name: s for s in list_installed_skills(target)}
    return [
        parsed.get(name)
        or InstalledSkill(name=name, description="", path=str(target / name), dir_name=name)
        for name in dir_names
    ]


def remove_command(
    skills: Annotated[
        list[str] | None, typer.Argument(help="Installed skill names to remove")
    ] = None,
    all_skills: Annotated[
        bool, typer.Option("--all", help="Remove every installed skill")
    ] = False,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
    target_dir: Annotated[
        Path | None, typer.Option("--dir", "-d", help="Install directory")
    ] = None,
) -> None:
    """Remove installed skills and their lock entries."""
    settings = get_settings()
    target = target_dir or settings.skills_dir
    installed = installed_dir_names(target)

    if not installed:
        console.print("No skills found to remove.")
        return

    if all_skills:
        selected = installed
    elif skills:
        selected = match_installed(installed, skills)
        if not selected:
            console.print(f"No matching skills found for: {escape(', '.join(skills))}")
            return
    elif is_interactive():
        try:
            chosen = choose_skills(_removal_choices(installed, target), title="Select skills to remove")
        except OperationCancelled:
            console.print("[yellow]Removal cancelled[/yellow]")
            return
        selected = [c.dir_name for c in chosen]
    else:
        console.print("[red]Error:[/red] Specify skills to remove, or use --all")
        raise typer.Exit(1)

    try:
        confirmed = yes or not is_interactive() or confirm_removal(selected)
    except OperationCancelled:
        confirmed = False
    if not confirmed:
        console.print("[yellow]Removal cancelled[/yellow]")
        return

    results = remove_skills(selected, target, LockStore(settings.lock_path))
    format_remove_results(results)
