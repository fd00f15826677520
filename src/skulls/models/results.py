# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Outcome models returned by the add, remove, and update flows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class InstallResult(BaseModel):
    """Outcome of installing one skill."""

    skill: str
    success: bool
    path: str = ""
    error: str | None = None
    overwrote: bool = False


class AddResult(BaseModel):
    """Outcome of one ``add`` invocation."""

    source: str
    discovered: dict[str, str] = Field(default_factory=dict)
    results: list[InstallResult] = Field(default_factory=list)
    listed_only: bool = False

    @property
    def successful(self) -> list[InstallResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[InstallResult]:
        return [r for r in self.results if not r.success]


class RemoveResult(BaseModel):
    """Outcome of removing one installed skill."""

    skill: str
    success: bool
    error: str | None = None


class SkillUpdate(BaseModel):
    """Update status of one lock entry."""

    name: str
    source: str
    skill_path: str = ""
    branch: str | None = None
    current_hash: str = ""
    latest_hash: str | None = None
    reason: str | None = None


class UpdateCheckReport(BaseModel):
    """Partition of lock entries by update status."""

    updates: list[SkillUpdate] = Field(default_factory=list)
    up_to_date: list[SkillUpdate] = Field(default_factory=list)
    errors: list[SkillUpdate] = Field(default_factory=list)
    skipped: list[SkillUpdate] = Field(default_factory=list)

    @property
    def checked(self) -> int:
        return len(self.updates) + len(self.up_to_date)


class UpdateResult(BaseModel):
    """Outcome of re-installing one skill during ``update``."""

    name: str
    success: bool
    error: str | None = None
