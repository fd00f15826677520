# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Copy skills into the flat target directory.

Every install replaces the destination directory wholesale; there is no
merge with a previous installation.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from skulls.core.constants import EXCLUDED_DIRS, EXCLUDED_FILES, SKILL_MANIFEST
from skulls.core.exceptions import InstallError, PathSafetyError
from skulls.install.paths import get_install_path, is_path_safe
from skulls.models.skill import InstalledSkill, RemoteSkill, Skill, WellKnownSkill
from skulls.parsers.skill_parser import read_manifest

logger = logging.getLogger("skulls.install.installer")


def _is_excluded(entry: Path) -> bool:
    if entry.name.startswith("_"):
        return True
    if entry.is_dir():
        return entry.name in EXCLUDED_DIRS
    return entry.name in EXCLUDED_FILES


def _copy_directory(src: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src.iterdir(), key=lambda p: p.name):
        if _is_excluded(entry):
            continue
        target = dest / entry.name
        if entry.is_dir():
            _copy_directory(entry, target)
        else:
            shutil.copy2(entry, target)


def _reset_directory(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)


def _install_skill_sync(skill: Skill, target_dir: Path) -> Path:
    dest = get_install_path(skill.name, target_dir)
    src = Path(skill.path).resolve()
    resolved_dest = dest.resolve()
    if src == resolved_dest:
        logger.info("%s is already installed at %s", skill.name, dest)
        return dest
    if src.is_relative_to(resolved_dest) or resolved_dest.is_relative_to(src):
        raise InstallError(
            f"Cannot install {skill.name}: source {src} overlaps install directory {resolved_dest}"
        )
    try:
        _reset_directory(dest)
        _copy_directory(Path(skill.path), dest)
    except OSError as exc:
        raise InstallError(f"Failed to install {skill.name}: {exc}") from exc
    logger.info("Installed %s -> %s", skill.name, dest)
    return dest


def _install_remote_skill_sync(skill: RemoteSkill, target_dir: Path) -> Path:
    dest = get_install_path(skill.install_name, target_dir)
    try:
        _reset_directory(dest)
        (dest / SKILL_MANIFEST).write_text(skill.content, encoding="utf-8")
    except OSError as exc:
        raise InstallError(f"Failed to install {skill.install_name}: {exc}") from exc
    logger.info("Installed %s -> %s", skill.install_name, dest)
    return dest


def _install_well_known_skill_sync(skill: WellKnownSkill, target_dir: Path) -> Path:
    dest = get_install_path(skill.install_name, target_dir)
    # Validate every path before touching the existing installation.
    for rel in skill.files:
        if not rel or not is_path_safe(dest, dest / rel) or (dest / rel).resolve() == dest.resolve():
            raise PathSafetyError(f"Unsafe file path in skill {skill.install_name}: {rel!r}")
    try:
        _reset_directory(dest)
        for rel, content in skill.files.items():
            target = dest / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise InstallError(f"Failed to install {skill.install_name}: {exc}") from exc
    logger.info("Installed %s -> %s", skill.install_name, dest)
    return dest


async def install_skill(skill: Skill, target_dir: Path) -> Path:
    """Copy a discovered skill directory into *target_dir*.

    Skips ``README.md``, ``metadata.json``, ``.git`` and anything starting
    with ``_``.

    Raises
    ------
    PathSafetyError
        If the install name escapes *target_dir*.
    InstallError
        On any filesystem failure.
    """
    return await asyncio.to_thread(_install_skill_sync, skill, target_dir)


async def install_remote_skill(skill: RemoteSkill, target_dir: Path) -> Path:
    """Write a fetched single-document skill as ``<target>/<name>/SKILL.md``."""
    return await asyncio.to_thread(_install_remote_skill_sync, skill, target_dir)


async def install_well_known_skill(skill: WellKnownSkill, target_dir: Path) -> Path:
    """Write every file of a well-known skill.

    Raises
    ------
    PathSafetyError
        If any file path resolves outside the skill's directory. Nothing is
        written in that case.
    """
    return await asyncio.to_thread(_install_well_known_skill_sync, skill, target_dir)


def is_skill_installed(name: str, target_dir: Path) -> bool:
    return get_install_path(name, target_dir).exists()


def list_installed_skills(target_dir: Path) -> list[InstalledSkill]:
    """Re-parse each subdirectory manifest of *target_dir*, sorted by directory."""
    if not target_dir.is_dir():
        return []

    installed: list[InstalledSkill] = []
    for entry in sorted(target_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue
        manifest = read_manifest(entry / SKILL_MANIFEST)
        if manifest is None:
            continue
        installed.append(
            InstalledSkill(
                name=manifest.name,
                description=manifest.description,
                path=str(entry),
                dir_name=entry.name,
            )
        )
    return installed


def installed_dir_names(target_dir: Path) -> list[str]:
    """Names of all subdirectories of *target_dir*, valid manifest or not."""
    if not target_dir.is_dir():
        return []
    return sorted(p.name for p in target_dir.iterdir() if p.is_dir())


def remove_installed_skill(dir_name: str, target_dir: Path) -> Path:
    """Delete ``<target_dir>/<dir_name>``.

    Raises
    ------
    PathSafetyError
        If *dir_name* would escape *target_dir*.
    InstallError
        If the directory cannot be removed.
    """
    base = target_dir.resolve()
    path = base / dir_name
    if not is_path_safe(base, path) or path.resolve() == base:
        raise PathSafetyError(f"Refusing to remove {dir_name!r}: outside {base}")
    try:
        if path.is_symlink():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as exc:
        raise InstallError(f"Failed to remove {dir_name}: {exc}") from exc
    logger.info("Removed %s", path)
    return path
