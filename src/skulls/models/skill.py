# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Skill models: discovered, fetched, and installed."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SkillManifest(BaseModel):
    """Validated frontmatter of a SKILL.md file."""

    name: str
    description: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    raw_frontmatter: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_internal(self) -> bool:
        return self.metadata.get("internal") is True


class Skill(BaseModel):
    """A skill discovered in a local directory tree."""

    name: str
    description: str
    path: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_internal(self) -> bool:
        return self.metadata.get("internal") is True


class RemoteSkill(BaseModel):
    """A single-document skill fetched from a host provider."""

    name: str
    description: str
    content: str
    install_name: str
    source_url: str
    provider_id: str
    source_identifier: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class WellKnownSkill(BaseModel):
    """A multi-file skill declared by a well-known discovery index."""

    name: str
    description: str
    install_name: str
    source_url: str
    files: dict[str, str] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)


class InstalledSkill(BaseModel):
    """A skill read back from the target directory."""

    name: str
    description: str
    path: str
    dir_name: str
