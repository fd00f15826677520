# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls check`` and ``skulls update``."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from skulls.cli.formatters.console import console, format_update_report, format_update_results
from skulls.cli.runner import run
from skulls.core.config import Settings, get_settings, should_install_internal_skills
from skulls.core.http import make_http_client
from skulls.lock.store import LockStore
from skulls.models.results import AddResult, SkillUpdate, UpdateCheckReport, UpdateResult
from skulls.pipeline.add import AddOptions, run_add
from skulls.updates.github import GitHubTreeClient
from skulls.updates.oracle import apply_updates, check_updates


async def _async_check(settings: Settings) -> UpdateCheckReport:
    store = LockStore(settings.lock_path)
    return await check_updates(store, GitHubTreeClient.from_settings(settings))


def check_command() -> None:
    """Check installed skills for upstream changes."""
    settings = get_settings()
    store = LockStore(settings.lock_path)
    if not store.all():
        console.print("No skills tracked in lock file.")
        console.print("[dim]Install skills with[/dim] skulls add <source>")
        return

    console.print("Checking for skill updates...")
    report = run(_async_check(settings))
    format_update_report(report)


async def _async_update(
    settings: Settings, target_dir: Path
) -> tuple[UpdateCheckReport, list[UpdateResult]]:
    store = LockStore(settings.lock_path)
    tree_client = GitHubTreeClient.from_settings(settings)
    report = await check_updates(store, tree_client)
    if not report.updates:
        return report, []

    async with make_http_client(settings.http_timeout) as client:

        async def reinstall(url: str, update: SkillUpdate) -> AddResult:
            options = AddOptions(
                target_dir=target_dir,
                skills=[update.name],
                yes=True,
                include_internal=should_install_internal_skills(settings),
            )
            return await run_add(
                url, options, store=store, http_client=client, tree_client=tree_client
            )

        return report, await apply_updates(report.updates, reinstall)


def update_command(
    target_dir: Annotated[
        Path | None, typer.Option("--dir", "-d", help="Install directory")
    ] = None,
) -> None:
    """Re-install every skill that changed upstream."""
    settings = get_settings()
    if not LockStore(settings.lock_path).all():
        console.print("No skills tracked in lock file.")
        return

    console.print("Checking for skill updates...")
    report, results = run(_async_update(settings, target_dir or settings.skills_dir))
    if not report.updates:
        if report.errors:
            format_update_report(report)
        elif report.checked:
            console.print("[green]✓ All skills are up to date[/green]")
        else:
            console.print("[dim]No skills to check.[/dim]")
        return

    console.print(f"Found {len(report.updates)} update(s)")
    format_update_results(results)
