# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for command results."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skulls.models.results import AddResult, RemoveResult, UpdateCheckReport, UpdateResult
from skulls.models.skill import InstalledSkill
from skulls.search.models import SearchResult

console = Console()


def _plural(count: int, word: str = "skill") -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _short_path(path: str) -> str:
    home = str(Path.home())
    return "~" + path[len(home):] if path.startswith(home) else path


def format_discovered(result: AddResult) -> None:
    """Print the skills a source offers without installing them."""
    console.print()
    console.print(f"[bold]Available Skills[/bold] in {result.source}")
    for name, description in result.discovered.items():
        console.print(f"  [cyan]{name}[/cyan]")
        console.print(f"    [dim]{description}[/dim]")
    console.print()
    console.print("Use --skill <name> to install specific skills")


def format_add_result(result: AddResult) -> None:
    """Print the install summary, successes first."""
    successful = result.successful
    failed = result.failed

    if successful:
        lines = []
        for r in successful:
            note = " [yellow](overwrote existing skill)[/yellow]" if r.overwrote else ""
            lines.append(f"[green]✓[/green] {_short_path(r.path)}{note}")
        console.print(
            Panel("\n".join(lines), title=f"[green]Installed {_plural(len(successful))}[/green]")
        )

    if failed:
        console.print(f"[red]Failed to install {len(failed)}[/red]")
        for r in failed:
            console.print(f"  [red]✗[/red] {r.skill}: [dim]{r.error}[/dim]")

    if successful:
        console.print(
            "[green]Done![/green] [dim]Review skills before use; they run with full agent permissions.[/dim]"
        )


def format_installed(skills: list[InstalledSkill], target_dir: Path) -> None:
    if not skills:
        console.print(f"No skills found in {_short_path(str(target_dir))}")
        return

    table = Table(title=f"Installed Skills ({_short_path(str(target_dir))})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Directory", style="dim")
    for skill in skills:
        table.add_row(skill.name, skill.description, skill.dir_name)
    console.print(table)


def format_remove_results(results: list[RemoveResult]) -> None:
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    if successful:
        console.print(f"[green]✓ Successfully removed {_plural(len(successful))}[/green]")
    if failed:
        console.print(f"[red]Failed to remove {_plural(len(failed))}[/red]")
        for r in failed:
            console.print(f"  [red]✗[/red] {r.skill}: [dim]{r.error}[/dim]")


def format_update_report(report: UpdateCheckReport) -> None:
    console.print(f"Checked {_plural(report.checked)} for updates")
    if report.updates:
        table = Table(title="Updates Available")
        table.add_column("Skill", style="cyan")
        table.add_column("Source")
        for update in report.updates:
            table.add_row(update.name, update.source)
        console.print(table)
        console.print("Run [bold]skulls update[/bold] to install them")
    elif report.checked:
        console.print("[green]✓ All skills are up to date[/green]")

    if report.errors:
        console.print(f"[yellow]Could not check {_plural(len(report.errors))}[/yellow]")
        for update in report.errors:
            console.print(f"  [yellow]•[/yellow] {update.name}: [dim]{update.reason}[/dim]")
    if report.skipped:
        console.print(f"[dim]Skipped {_plural(len(report.skipped))} that cannot be checked[/dim]")


def format_update_results(results: list[UpdateResult]) -> None:
    updated = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    for r in updated:
        console.print(f"  [green]✓[/green] Updated {r.name}")
    for r in failed:
        console.print(f"  [red]✗[/red] Failed to update {r.name}: [dim]{r.error}[/dim]")
    if updated:
        console.print(f"[green]Updated {_plural(len(updated))}[/green]")
    if failed:
        console.print(f"[red]Failed to update {_plural(len(failed))}[/red]")


def format_search_results(results: list[SearchResult], query: str, base_url: str) -> None:
    if not results:
        console.print(f'[dim]No skills found for "{query}"[/dim]')
        return

    console.print("[dim]Install with[/dim] skulls add <owner/repo@skill>")
    table = Table(title=f'Skills matching "{query}"')
    table.add_column("Install", style="cyan", no_wrap=True)
    table.add_column("Installs", justify="right")
    table.add_column("URL", style="dim")
    for hit in results:
        table.add_row(hit.install_source, str(hit.installs), f"{base_url.rstrip('/')}/{hit.id}")
    console.print(table)
