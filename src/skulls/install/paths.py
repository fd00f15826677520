# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Install-name sanitization and path containment checks."""

from __future__ import annotations

import re
from pathlib import Path

from skulls.core.constants import FALLBACK_NAME, MAX_NAME_LENGTH
from skulls.core.exceptions import PathSafetyError

_DISALLOWED_RE = re.compile(r"[^a-z0-9._]+")


def sanitize_name(name: str) -> str:
    """Turn a skill name into a safe directory name.

    Lower-cases, collapses runs of disallowed characters into ``-``, strips
    leading and trailing dots and dashes, and truncates. Falls back to a
    placeholder when nothing usable remains.
    """
    sanitized = _DISALLOWED_RE.sub("-", name.lower())
    sanitized = sanitized.strip(".-")
    sanitized = sanitized[:MAX_NAME_LENGTH].strip(".-")
    return sanitized or FALLBACK_NAME


def is_path_safe(base: Path | str, target: Path | str) -> bool:
    """Return True if *target* resolves to *base* or somewhere below it."""
    base_resolved = Path(base).resolve()
    target_resolved = Path(target).resolve()
    return target_resolved == base_resolved or target_resolved.is_relative_to(base_resolved)


def get_install_path(name: str, target_dir: Path | str) -> Path:
    """Return the directory a skill named *name* installs into.

    Raises
    ------
    PathSafetyError
        If the sanitized name would escape *target_dir*.
    """
    base = Path(target_dir).resolve()
    path = base / sanitize_name(name)
    if not is_path_safe(base, path) or path.resolve() == base:
        raise PathSafetyError(f"Invalid skill name: potential path traversal detected ({name!r})")
    return path
