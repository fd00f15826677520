# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""On-disk lock file schema."""

from __future__ import annotations

from pydantic import BaseModel, Field

from skulls.core.constants import LOCK_VERSION


class LockEntry(BaseModel):
    """Provenance for one installed skill."""

    source: str
    source_type: str = Field(alias="sourceType")
    source_url: str = Field(default="", alias="sourceUrl")
    skill_path: str | None = Field(default=None, alias="skillPath")
    skill_folder_hash: str = Field(default="", alias="skillFolderHash")
    installed_at: str = Field(default="", alias="installedAt")
    updated_at: str = Field(default="", alias="updatedAt")

    model_config = {"populate_by_name": True}

    @property
    def is_checkable(self) -> bool:
        """Only GitHub entries with a stored hash and path can be checked."""
        return (
            self.source_type == "github"
            and bool(self.skill_folder_hash)
            and bool(self.skill_path)
        )


class LockFile(BaseModel):
    """The whole lock document."""

    version: int = LOCK_VERSION
    skills: dict[str, LockEntry] = Field(default_factory=dict)
