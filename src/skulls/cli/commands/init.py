# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""``skulls init``: scaffold a new SKILL.md."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml

from skulls.cli.formatters.console import console
from skulls.core.constants import SKILL_MANIFEST

DEFAULT_DESCRIPTION = "A brief description of what this skill does"

SKILL_BODY = """\
# {name}

Instructions for the agent to follow when this skill is activated.

## When to use

Describe when this skill should be used.

## Instructions

1. First step
2. Second step
3. Additional steps as needed
"""


def render_skill_template(name: str) -> str:
    frontmatter = yaml.safe_dump(
        {"name": name, "description": DEFAULT_DESCRIPTION},
        sort_keys=False,
        allow_unicode=True,
    )
    return f"---\n{frontmatter}---\n\n" + SKILL_BODY.format(name=name)


def init_command(
    name: Annotated[
        str | None,
        typer.Argument(help="Skill name; creates <name>/SKILL.md instead of ./SKILL.md"),
    ] = None,
) -> None:
    """Create a starter SKILL.md."""
    cwd = Path.cwd()
    skill_name = name or cwd.name
    skill_dir = cwd / name if name else cwd
    skill_file = skill_dir / SKILL_MANIFEST
    display_path = f"{name}/{SKILL_MANIFEST}" if name else SKILL_MANIFEST

    if skill_file.exists():
        console.print(f"Skill already exists at [dim]{display_path}[/dim]")
        return

    skill_dir.mkdir(parents=True, exist_ok=True)
    skill_file.write_text(render_skill_template(skill_name), encoding="utf-8")

    console.print(f"Initialized skill: [dim]{skill_name}[/dim]")
    console.print(f"[dim]Created:[/dim] {display_path}")
    console.print(f"Next: edit {display_path}, then update name and description in the frontmatter")
