# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls add``: install skills from a source."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from skulls.cli.formatters.console import console, format_add_result, format_discovered
from skulls.cli.prompts import choose_skills, confirm_install, is_interactive
from skulls.cli.runner import run
from skulls.core.config import Settings, get_settings, should_install_internal_skills
from skulls.core.http import make_http_client
from skulls.lock.store import LockStore
from skulls.models.results import AddResult
from skulls.pipeline.add import AddOptions, run_add
from skulls.pipeline.selection import WILDCARD
from skulls.updates.github import GitHubTreeClient


async def _async_add(source: str, options: AddOptions, settings: Settings) -> AddResult:
    interactive = is_interactive()
    async with make_http_client(settings.http_timeout) as client:
        return await run_add(
            source,
            options,
            store=LockStore(settings.lock_path),
            http_client=client,
            tree_client=GitHubTreeClient.from_settings(settings),
            choose=choose_skills if interactive else None,
            confirm=confirm_install if interactive else None,
        )


def add_command(
    source: Annotated[
        str | None,
        typer.Argument(help="owner/repo, git or https URL, or local path"),
    ] = None,
    skill: Annotated[
        list[str] | None,
        typer.Option("--skill", "-s", help="Skill name to install (repeatable, '*' for all)"),
    ] = None,
    list_only: Annotated[
        bool, typer.Option("--list", "-l", help="List available skills without installing")
    ] = False,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Install all found skills without prompting")
    ] = False,
    all_skills: Annotated[
        bool, typer.Option("--all", help="Shorthand for --skill '*' --yes")
    ] = False,
    full_depth: Annotated[
        bool, typer.Option("--full-depth", help="Search the whole tree, not just the top level")
    ] = False,
    target_dir: Annotated[
        Path | None, typer.Option("--dir", "-d", help="Install directory")
    ] = None,
) -> None:
    """Install skills from a repository, URL, or local directory."""
    if not source:
        console.print("[red]Missing required argument: source[/red]")
        console.print("[dim]Usage: skulls add <source> [options][/dim]")
        raise typer.Exit(1)

    settings = get_settings()
    skills = list(skill or [])
    if all_skills and WILDCARD not in skills:
        skills.append(WILDCARD)

    options = AddOptions(
        target_dir=target_dir or settings.skills_dir,
        skills=skills,
        list_only=list_only,
        yes=yes or all_skills,
        full_depth=full_depth,
        include_internal=should_install_internal_skills(settings),
    )

    result = run(_async_add(source, options, settings))
    if result.listed_only:
        format_discovered(result)
    else:
        format_add_result(result)
