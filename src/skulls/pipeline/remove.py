# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Remove installed skills and their lock entries."""

from __future__ import annotations

import logging
from pathlib import Path

from skulls.core.exceptions import InstallError, LockWriteError, PathSafetyError
from skulls.install.installer import remove_installed_skill
from skulls.install.paths import sanitize_name
from skulls.lock.store import LockStore
from skulls.models.results import RemoveResult

logger = logging.getLogger("skulls.pipeline.remove")


def match_installed(installed: list[str], requested: list[str]) -> list[str]:
    """Installed directory names matching *requested*, case-insensitively.

    A requested display name also matches its sanitized directory name.
    """
    wanted = {r.lower() for r in requested} | {sanitize_name(r) for r in requested}
    return [name for name in installed if name.lower() in wanted]


def remove_skills(names: list[str], target_dir: Path, store: LockStore) -> list[RemoveResult]:
    """Delete each skill directory, then its lock entry.

    Failures are reported per skill. A lock entry that cannot be removed is
    logged and does not fail the removal.
    """
    results: list[RemoveResult] = []
    for name in names:
        try:
            remove_installed_skill(name, target_dir)
        except (InstallError, PathSafetyError) as exc:
            results.append(RemoveResult(skill=name, success=False, error=str(exc)))
            continue
        try:
            store.remove(name)
        except LockWriteError as exc:
            logger.warning(
                "Removed %s but could not update the lock file: %s", name, exc, extra={"skill": name}
            )
        results.append(RemoveResult(skill=name, success=True))
    return results
