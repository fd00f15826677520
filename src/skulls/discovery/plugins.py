# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Expand ``.claude-plugin`` bundle manifests into candidate skill directories.

Two manifest shapes are recognized inside ``<root>/.claude-plugin/``:

``marketplace.json``
    ``{"metadata": {"pluginRoot": "plugins"}, "plugins": [{"source": "./x",
    "skills": ["skills/a"]}]}``. Each plugin's ``skills`` entries resolve
    relative to the plugin directory; a plugin without ``skills`` contributes
    its ``skills/`` container.

``plugin.json``
    ``{"skills": ["./skills/a", "./skills/b"]}`` or a single string path,
    relative to the root.

Remote plugin sources (URLs, ``{"source": "github", ...}``) are ignored; only
paths inside the scanned tree are expanded.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

from skulls.core.constants import MARKETPLACE_MANIFEST, PLUGIN_DIR, PLUGIN_MANIFEST, SKILLS_SUBDIR
from skulls.install.paths import is_path_safe

logger = logging.getLogger("skulls.discovery.plugins")


def _clean_relative_path(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace("\\", "/")
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    cleaned = cleaned.strip("/")
    if cleaned in {"", "."}:
        return None
    return cleaned


def _join_relative_paths(base: str | None, leaf: str | None) -> str | None:
    if not base:
        return leaf
    if not leaf:
        return base
    return str(PurePosixPath(base) / PurePosixPath(leaf))


def _is_probable_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable plugin manifest %s: %s", path, exc)
        return None


def _marketplace_paths(payload: Any) -> list[str]:
    if not isinstance(payload, dict) or not isinstance(payload.get("plugins"), list):
        return []

    plugin_root = None
    metadata = payload.get("metadata")
    if isinstance(metadata, dict):
        plugin_root = _clean_relative_path(metadata.get("pluginRoot"))

    paths: list[str] = []
    for entry in payload["plugins"]:
        if not isinstance(entry, dict):
            continue
        source = entry.get("source")
        if isinstance(source, str) and _is_probable_url(source.strip()):
            continue
        if source is not None and not isinstance(source, str):
            continue
        plugin_dir = _join_relative_paths(plugin_root, _clean_relative_path(source))

        skills = entry.get("skills")
        declared = [
            _join_relative_paths(plugin_dir, _clean_relative_path(s))
            for s in (skills if isinstance(skills, list) else [])
        ]
        declared = [p for p in declared if p]
        if declared:
            paths.extend(declared)
        else:
            paths.append(_join_relative_paths(plugin_dir, SKILLS_SUBDIR) or SKILLS_SUBDIR)
            if plugin_dir:
                paths.append(plugin_dir)
    return paths


def _plugin_paths(payload: Any) -> list[str]:
    if not isinstance(payload, dict):
        return []
    skills = payload.get("skills")
    if isinstance(skills, str):
        skills = [skills]
    if not isinstance(skills, list):
        return []
    return [p for p in (_clean_relative_path(s) for s in skills) if p]


def plugin_skill_dirs(root: Path) -> list[Path]:
    """Return directories declared by plugin manifests under *root*.

    Declared paths that resolve outside *root* are dropped with a warning.
    The returned directories may be skill roots or containers of skills.
    """
    plugin_dir = root / PLUGIN_DIR
    if not plugin_dir.is_dir():
        return []

    relative: list[str] = []
    marketplace = plugin_dir / MARKETPLACE_MANIFEST
    if marketplace.is_file():
        relative.extend(_marketplace_paths(_load_json(marketplace)))
    plugin = plugin_dir / PLUGIN_MANIFEST
    if plugin.is_file():
        relative.extend(_plugin_paths(_load_json(plugin)))

    dirs: list[Path] = []
    for rel in relative:
        candidate = root / rel
        if not is_path_safe(root, candidate):
            logger.warning("Ignoring plugin skill path outside the source: %s", rel)
            continue
        if candidate.is_dir() and candidate not in dirs:
            dirs.append(candidate)
    return dirs
