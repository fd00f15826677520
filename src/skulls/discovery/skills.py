# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Find valid SKILL.md manifests in a directory tree."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, TypeVar

from skulls.core.constants import CONTAINER_DIRS, SKILL_MANIFEST, SKIP_DIRS
from skulls.core.exceptions import PathSafetyError
from skulls.discovery.plugins import plugin_skill_dirs
from skulls.install.paths import is_path_safe, sanitize_name
from skulls.models.skill import Skill
from skulls.parsers.skill_parser import read_manifest

logger = logging.getLogger("skulls.discovery.skills")

SkillT = TypeVar("SkillT")


def _load_skill(directory: Path) -> Skill | None:
    manifest_path = directory / SKILL_MANIFEST
    if not manifest_path.is_file():
        return None
    manifest = read_manifest(manifest_path)
    if manifest is None:
        return None
    return Skill(
        name=manifest.name,
        description=manifest.description,
        path=str(directory.resolve()),
        metadata=manifest.metadata,
    )


def _child_dirs(directory: Path) -> list[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        return []
    return [p for p in entries if p.is_dir() and p.name not in SKIP_DIRS]


def _walk(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, _filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)
        yield Path(dirpath)


def _shallow_candidates(root: Path) -> Iterator[Path]:
    """Yield the directories a default-depth search looks at."""
    yield from _child_dirs(root)
    for container in CONTAINER_DIRS:
        container_dir = root / container
        if container_dir.is_dir():
            yield container_dir
            yield from _child_dirs(container_dir)
    for declared in plugin_skill_dirs(root):
        yield declared
        yield from _child_dirs(declared)


def discover_skills(
    root: Path | str,
    subpath: str | None = None,
    *,
    include_internal: bool = False,
    full_depth: bool = False,
) -> list[Skill]:
    """Discover skills under *root*, optionally narrowed to *subpath*.

    A directory whose own SKILL.md is valid is returned alone unless
    *full_depth* is set. Otherwise its immediate children, the conventional
    container directories, and plugin-declared directories are searched;
    *full_depth* searches the whole tree instead.

    Skills flagged ``metadata.internal: true`` are dropped unless
    *include_internal*. Duplicate names keep the first occurrence.

    Raises
    ------
    PathSafetyError
        If *subpath* resolves outside *root*.
    """
    base = Path(root).resolve()
    search = base
    if subpath:
        search = (base / subpath).resolve()
        if not is_path_safe(base, search):
            raise PathSafetyError(f"Subpath escapes the source directory: {subpath}")
    if not search.is_dir():
        logger.debug("Discovery root %s is not a directory", search)
        return []

    def visible(skill: Skill | None) -> bool:
        return skill is not None and (include_internal or not skill.is_internal)

    if not full_depth:
        root_skill = _load_skill(search)
        if visible(root_skill):
            return [root_skill]
        candidates: Iterable[Path] = _shallow_candidates(search)
    else:
        candidates = _walk(search)

    skills: list[Skill] = []
    seen_dirs: set[Path] = set()
    seen_names: set[str] = set()
    for directory in candidates:
        resolved = directory.resolve()
        if resolved in seen_dirs:
            continue
        seen_dirs.add(resolved)
        skill = _load_skill(directory)
        if not visible(skill) or skill.name in seen_names:
            continue
        seen_names.add(skill.name)
        skills.append(skill)

    logger.debug("Discovered %d skill(s) under %s", len(skills), search)
    return skills


def get_skill_display_name(skill: Skill) -> str:
    return skill.name or Path(skill.path).name


def _match_names(skill: Any) -> set[str]:
    names = {skill.name.lower(), sanitize_name(skill.name)}
    install_name = getattr(skill, "install_name", None)
    if install_name:
        names.add(install_name.lower())
    path = getattr(skill, "path", None)
    if path:
        names.add(Path(path).name.lower())
    return names


def filter_skills(skills: list[SkillT], filters: Iterable[str]) -> list[SkillT]:
    """Select skills whose name or install name matches any filter.

    Matching is case-insensitive; filters may use shell-style wildcards.
    Works for discovered and well-known skills alike.
    """
    patterns = [f.strip().lower() for f in filters if f.strip()]
    return [
        skill
        for skill in skills
        if any(fnmatch.fnmatchcase(n, p) for p in patterns for n in _match_names(skill))
    ]
