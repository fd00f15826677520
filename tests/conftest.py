# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "SKULLS_GITHUB_TOKEN",
    "INSTALL_INTERNAL_SKILLS",
    "SKULLS_INSTALL_INTERNAL_SKILLS",
    "SKILLS_API_URL",
    "SKULLS_SEARCH_API_URL",
    "SKULLS_LOG_LEVEL",
    "SKULLS_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real ~/.agents directory and credentials."""
    home = tmp_path / "home" / ".agents"
    monkeypatch.setenv("SKULLS_SKILLS_DIR", str(home / "skills"))
    monkeypatch.setenv("SKULLS_LOCK_PATH", str(home / ".skill-lock.json"))
    monkeypatch.setenv("SKULLS_USE_GH_CLI", "false")
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".agents" / "skills"


@pytest.fixture
def lock_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".agents" / ".skill-lock.json"


def _skill_md(name: str | None, description: str | None, metadata: dict | None = None, body: str = "") -> str:
    """Render a SKILL.md document; ``None`` leaves a field out."""
    fm: dict[str, object] = {}
    if name is not None:
        fm["name"] = name
    if description is not None:
        fm["description"] = description
    if metadata is not None:
        fm["metadata"] = metadata
    return f"---\n{yaml.safe_dump(fm, sort_keys=False)}---\n\n{body or f'# {name}'}\n"


@pytest.fixture
def make_skill() -> Callable[..., Path]:
    """Write ``<directory>/SKILL.md`` and return the directory."""

    def _make(
        directory: Path,
        name: str | None = "demo",
        description: str | None = "A demo skill",
        metadata: dict | None = None,
        body: str = "",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "SKILL.md").write_text(_skill_md(name, description, metadata, body), encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def render_skill() -> Callable[..., str]:
    """Return the SKILL.md renderer for tests that need raw text."""
    return _skill_md
