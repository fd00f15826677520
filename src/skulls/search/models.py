# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Pydantic models for the skills search API."""

from __future__ import annotations

from pydantic import BaseModel


class SearchResult(BaseModel):
    """One hit returned by ``/api/search``."""

    id: str
    name: str
    installs: int = 0
    source: str = ""

    @property
    def install_source(self) -> str:
        """What to pass to ``skulls add`` to install this hit."""
        return f"{self.source or self.id}@{self.name}"
