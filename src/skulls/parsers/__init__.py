# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SKILL.md and source string parsers."""

from skulls.parsers.skill_parser import parse_manifest, parse_skill_file, read_manifest
from skulls.parsers.source_parser import format_source, get_owner_repo, parse_source

__all__ = [
    "format_source",
    "get_owner_repo",
    "parse_manifest",
    "parse_skill_file",
    "parse_source",
    "read_manifest",
]
