# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for skulls."""

from skulls.models.lock import LockEntry, LockFile
from skulls.models.results import (
    AddResult,
    InstallResult,
    RemoveResult,
    SkillUpdate,
    UpdateCheckReport,
    UpdateResult,
)
from skulls.models.skill import InstalledSkill, RemoteSkill, Skill, SkillManifest, WellKnownSkill
from skulls.models.source import SourceDescriptor

__all__ = [
    "AddResult",
    "InstallResult",
    "InstalledSkill",
    "LockEntry",
    "LockFile",
    "RemoteSkill",
    "RemoveResult",
    "Skill",
    "SkillManifest",
    "SkillUpdate",
    "SourceDescriptor",
    "UpdateCheckReport",
    "UpdateResult",
    "WellKnownSkill",
]
