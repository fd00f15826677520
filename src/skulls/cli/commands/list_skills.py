# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls list``: show installed skills."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from skulls.cli.formatters.console import format_installed
from skulls.core.config import get_settings
from skulls.install.installer import list_installed_skills


def list_command(
    target_dir: Annotated[
        Path | None, typer.Option("--dir", "-d", help="Install directory")
    ] = None,
) -> None:
    """List skills in the install directory."""
    target = target_dir or get_settings().skills_dir
    format_installed(list_installed_skills(target), target)
