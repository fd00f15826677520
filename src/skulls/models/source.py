# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Parsed source descriptor."""

from __future__ import annotations

from pydantic import BaseModel

from skulls.core.constants import SourceKind


class SourceDescriptor(BaseModel):
    """The parsed form of a user-supplied source string.

    ``url`` is empty for local sources and ``local_path`` is only set for
    them.
    """

    kind: SourceKind
    url: str = ""
    local_path: str | None = None
    ref: str | None = None
    subpath: str | None = None
    skill_filter: str | None = None

    model_config = {"frozen": True}

    @property
    def is_local(self) -> bool:
        return self.kind == SourceKind.LOCAL

    @property
    def location(self) -> str:
        """The path or URL this descriptor points at, for display."""
        return self.local_path if self.kind == SourceKind.LOCAL and self.local_path else self.url
