# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls find``: search the public skills index."""

from __future__ import annotations

from typing import Annotated

import typer

from skulls.cli.formatters.console import console, format_search_results
from skulls.cli.runner import run
from skulls.core.config import get_settings
from skulls.search.client import DEFAULT_LIMIT, SkillsSearchClient


def find_command(
    query: Annotated[list[str] | None, typer.Argument(help="Search terms")] = None,
    limit: Annotated[
        int, typer.Option("--limit", "-n", help="Maximum results")
    ] = DEFAULT_LIMIT,
) -> None:
    """Search for skills by keyword."""
    text = " ".join(query or []).strip()
    if not text:
        console.print("[red]Missing search query[/red]")
        console.print("[dim]Usage: skulls find <query>[/dim]")
        raise typer.Exit(1)

    settings = get_settings()
    client = SkillsSearchClient(base_url=settings.search_api_url, timeout=settings.http_timeout)
    results = run(client.search(text, limit=limit))
    format_search_results(results, text, settings.search_api_url)
