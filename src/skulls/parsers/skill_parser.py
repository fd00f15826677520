# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Parse SKILL.md files into validated manifests."""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import frontmatter

from skulls.core.exceptions import ParseError
from skulls.models.skill import SkillManifest

logger = logging.getLogger("skulls.parsers.skill_parser")


def _str_or_none(val: object) -> str | None:
    """Coerce a frontmatter value to a non-empty stripped str, or None."""
    if not isinstance(val, str):
        return None
    val = val.strip()
    return val or None


def parse_manifest(raw_content: str, file_path: str = "<stdin>") -> SkillManifest | None:
    """Parse raw SKILL.md content.

    Parameters
    ----------
    raw_content:
        The full text of the SKILL.md file (including frontmatter fences).
    file_path:
        An identifier for the source, used in log messages.

    Returns
    -------
    SkillManifest, or ``None`` when ``name`` or ``description`` is missing.
    A document without a valid frontmatter block is not a skill.
    """
    try:
        post = frontmatter.loads(raw_content)
    except Exception as exc:
        logger.debug("Invalid frontmatter in %s: %s", file_path, exc)
        return None

    fm_data: dict[str, object] = dict(post.metadata) if post.metadata else {}
    name = _str_or_none(fm_data.get("name"))
    description = _str_or_none(fm_data.get("description"))
    if name is None or description is None:
        logger.debug("Skipping %s: missing name or description", file_path)
        return None

    metadata = fm_data.get("metadata")
    return SkillManifest(
        name=name,
        description=description,
        metadata=dict(metadata) if isinstance(metadata, dict) else {},
        body=post.content,
        raw_frontmatter=fm_data,
    )


def read_manifest(path: Path) -> SkillManifest | None:
    """Read a SKILL.md from disk; unreadable files are treated as absent."""
    try:
        raw_content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None
    return parse_manifest(raw_content, file_path=str(path))


async def parse_skill_file(file_path: str) -> SkillManifest | None:
    """Read a SKILL.md from disk asynchronously and parse it.

    Raises
    ------
    ParseError
        If the file cannot be read.
    """
    resolved = str(Path(file_path).resolve())
    try:
        async with aiofiles.open(resolved, encoding="utf-8") as fh:
            raw_content = await fh.read()
    except OSError as exc:
        raise ParseError(f"Cannot read {resolved}: {exc}") from exc

    return parse_manifest(raw_content, file_path=resolved)
