# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for the SKILL.md manifest parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from skulls.core.exceptions import ParseError
from skulls.parsers.skill_parser import parse_manifest, parse_skill_file, read_manifest

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

MINIMAL_SKILL = """\
---
name: pdf-tools
description: Work with PDF files.
---

# PDF Tools

Use this skill to split and merge PDFs.
"""


# ---------------------------------------------------------------------------
# parse_manifest
# ---------------------------------------------------------------------------


class TestParseManifest:
    """Tests for parse_manifest (synchronous, string input)."""

    def test_minimal(self) -> None:
        manifest = parse_manifest(MINIMAL_SKILL)
        assert manifest is not None
        assert manifest.name == "pdf-tools"
        assert manifest.description == "Work with PDF files."
        assert manifest.metadata == {}
        assert "split and merge" in manifest.body
        assert manifest.is_internal is False

    def test_metadata_and_extra_fields(self) -> None:
        raw = """\
---
name: helper
description: Helps.
license: MIT
metadata:
  internal: true
  version: "1.2"
---
body
"""
        manifest = parse_manifest(raw)
        assert manifest is not None
        assert manifest.metadata == {"internal": True, "version": "1.2"}
        assert manifest.raw_frontmatter["license"] == "MIT"
        assert manifest.is_internal is True

    def test_internal_must_be_boolean_true(self) -> None:
        raw = "---\nname: a\ndescription: b\nmetadata:\n  internal: 'true'\n---\n"
        manifest = parse_manifest(raw)
        assert manifest is not None
        assert manifest.is_internal is False

    def test_values_are_stripped(self) -> None:
        manifest = parse_manifest("---\nname: '  spaced  '\ndescription: ' d '\n---\n")
        assert manifest is not None
        assert manifest.name == "spaced"
        assert manifest.description == "d"

    @pytest.mark.parametrize(
        "raw",
        [
            "---\ndescription: no name\n---\n",
            "---\nname: no-description\n---\n",
            "---\nname: ''\ndescription: empty name\n---\n",
            "---\nname: 42\ndescription: numeric name\n---\n",
            "---\nname: ok\ndescription: [not, a, string]\n---\n",
            "# Just markdown\n\nNo frontmatter here.\n",
            "",
        ],
    )
    def test_invalid_documents_return_none(self, raw: str) -> None:
        assert parse_manifest(raw) is None

    def test_malformed_yaml_returns_none(self) -> None:
        assert parse_manifest("---\nname: [unclosed\ndescription: x\n---\n") is None


# ---------------------------------------------------------------------------
# File readers
# ---------------------------------------------------------------------------


class TestReadManifest:
    """Tests for the synchronous file reader."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "SKILL.md"
        path.write_text(MINIMAL_SKILL, encoding="utf-8")
        manifest = read_manifest(path)
        assert manifest is not None
        assert manifest.name == "pdf-tools"

    def test_missing_file_is_none(self, tmp_path: Path) -> None:
        assert read_manifest(tmp_path / "SKILL.md") is None

    def test_undecodable_file_is_none(self, tmp_path: Path) -> None:
        path = tmp_path / "SKILL.md"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert read_manifest(path) is None


class TestParseSkillFile:
    """Tests for the async file reader."""

    async def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "SKILL.md"
        path.write_text(MINIMAL_SKILL, encoding="utf-8")
        manifest = await parse_skill_file(str(path))
        assert manifest is not None
        assert manifest.description == "Work with PDF files."

    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ParseError, match="Cannot read"):
            await parse_skill_file(str(tmp_path / "missing.md"))
