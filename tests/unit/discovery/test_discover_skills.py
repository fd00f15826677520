# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for SKILL.md discovery and skill filtering."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from skulls.core.exceptions import PathSafetyError
from skulls.discovery.skills import discover_skills, filter_skills, get_skill_display_name
from skulls.models.skill import Skill, WellKnownSkill


def _names(skills: list[Skill]) -> list[str]:
    return sorted(s.name for s in skills)


# ---------------------------------------------------------------------------
# Search depth
# ---------------------------------------------------------------------------


class TestDiscoveryDepth:
    """Tests for the default and full-depth search."""

    def test_root_skill_is_returned_alone(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path, name="root-skill")
        make_skill(tmp_path / "child", name="child-skill")
        skills = discover_skills(tmp_path)
        assert _names(skills) == ["root-skill"]
        assert skills[0].path == str(tmp_path.resolve())

    def test_full_depth_includes_root_and_children(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path, name="root-skill")
        make_skill(tmp_path / "child", name="child-skill")
        assert _names(discover_skills(tmp_path, full_depth=True)) == ["child-skill", "root-skill"]

    def test_immediate_children(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "one", name="skill-one")
        make_skill(tmp_path / "two", name="skill-two")
        assert _names(discover_skills(tmp_path)) == ["skill-one", "skill-two"]

    def test_deep_skill_needs_full_depth(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "a" / "b" / "c", name="deep")
        assert discover_skills(tmp_path) == []
        assert _names(discover_skills(tmp_path, full_depth=True)) == ["deep"]

    @pytest.mark.parametrize(
        "container",
        ["skills", "skills/.curated", "skills/.experimental", ".agents/skills", ".claude/skills"],
    )
    def test_container_directories(self, tmp_path: Path, make_skill, container: str) -> None:
        make_skill(tmp_path / container / "inner", name="contained")
        assert _names(discover_skills(tmp_path)) == ["contained"]

    def test_skip_dirs_are_not_descended(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "node_modules" / "pkg", name="vendored")
        make_skill(tmp_path / ".git" / "hooks", name="hooked")
        assert discover_skills(tmp_path, full_depth=True) == []

    def test_missing_root_is_empty(self, tmp_path: Path) -> None:
        assert discover_skills(tmp_path / "nope") == []


# ---------------------------------------------------------------------------
# Validity, visibility and duplicates
# ---------------------------------------------------------------------------


class TestDiscoveryFiltering:
    """Tests for manifest validity, internal skills and duplicates."""

    def test_invalid_manifests_are_skipped(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "ok", name="ok")
        make_skill(tmp_path / "no-desc", name="no-desc", description=None)
        make_skill(tmp_path / "no-name", name=None)
        (tmp_path / "plain").mkdir()
        (tmp_path / "plain" / "SKILL.md").write_text("# not a skill\n", encoding="utf-8")
        assert _names(discover_skills(tmp_path)) == ["ok"]

    def test_internal_hidden_by_default(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "public", name="public")
        make_skill(tmp_path / "secret", name="secret", metadata={"internal": True})
        assert _names(discover_skills(tmp_path)) == ["public"]
        assert _names(discover_skills(tmp_path, include_internal=True)) == ["public", "secret"]

    def test_internal_root_falls_through_to_children(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path, name="hidden-root", metadata={"internal": True})
        make_skill(tmp_path / "child", name="child")
        assert _names(discover_skills(tmp_path)) == ["child"]

    def test_duplicate_names_keep_first(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "a", name="dup", description="first")
        make_skill(tmp_path / "skills" / "b", name="dup", description="second")
        skills = discover_skills(tmp_path)
        assert len(skills) == 1
        assert skills[0].description == "first"

    def test_container_dir_counted_once(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "skills", name="container-skill")
        assert _names(discover_skills(tmp_path)) == ["container-skill"]


class TestSubpath:
    """Tests for narrowing discovery to a subpath."""

    def test_subpath_narrows_search(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "pack-a" / "x", name="x")
        make_skill(tmp_path / "pack-b" / "y", name="y")
        assert _names(discover_skills(tmp_path, "pack-b")) == ["y"]

    def test_subpath_pointing_at_skill(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "skills" / "target", name="target")
        make_skill(tmp_path / "skills" / "other", name="other")
        assert _names(discover_skills(tmp_path, "skills/target")) == ["target"]

    def test_escaping_subpath_raises(self, tmp_path: Path) -> None:
        root = tmp_path / "repo"
        root.mkdir()
        with pytest.raises(PathSafetyError):
            discover_skills(root, "../elsewhere")


# ---------------------------------------------------------------------------
# Plugin manifests
# ---------------------------------------------------------------------------


class TestPluginManifests:
    """Tests for skills declared by .claude-plugin manifests."""

    def _write(self, root: Path, name: str, payload: object) -> None:
        plugin_dir = root / ".claude-plugin"
        plugin_dir.mkdir(parents=True, exist_ok=True)
        (plugin_dir / name).write_text(json.dumps(payload), encoding="utf-8")

    def test_marketplace_declared_skills(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "plugins" / "p1" / "tools" / "lint", name="lint")
        self._write(
            tmp_path,
            "marketplace.json",
            {
                "metadata": {"pluginRoot": "./plugins"},
                "plugins": [{"source": "./p1", "skills": ["./tools/lint"]}],
            },
        )
        assert _names(discover_skills(tmp_path)) == ["lint"]

    def test_marketplace_plugin_without_skills_uses_container(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "bundles" / "p2" / "skills" / "fmt", name="fmt")
        self._write(tmp_path, "marketplace.json", {"plugins": [{"source": "./bundles/p2"}]})
        assert _names(discover_skills(tmp_path)) == ["fmt"]

    def test_remote_plugin_sources_are_ignored(self, tmp_path: Path) -> None:
        self._write(
            tmp_path,
            "marketplace.json",
            {"plugins": [{"source": "https://example.com/plugin.git", "skills": ["a"]}]},
        )
        assert discover_skills(tmp_path) == []

    def test_plugin_json_string_path(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "custom" / "deep" / "thing", name="thing")
        self._write(tmp_path, "plugin.json", {"skills": "./custom/deep/thing"})
        assert _names(discover_skills(tmp_path)) == ["thing"]

    def test_escaping_plugin_path_is_dropped(self, tmp_path: Path, make_skill) -> None:
        root = tmp_path / "repo"
        make_skill(tmp_path / "outside", name="outside")
        self._write(root, "plugin.json", {"skills": ["../outside"]})
        assert discover_skills(root) == []

    def test_malformed_manifest_is_ignored(self, tmp_path: Path, make_skill) -> None:
        make_skill(tmp_path / "plain", name="plain")
        plugin_dir = tmp_path / ".claude-plugin"
        plugin_dir.mkdir()
        (plugin_dir / "plugin.json").write_text("{not json", encoding="utf-8")
        assert _names(discover_skills(tmp_path)) == ["plain"]


# ---------------------------------------------------------------------------
# Filtering helpers
# ---------------------------------------------------------------------------


def _skill(name: str, path: str = "/tmp/x") -> Skill:
    return Skill(name=name, description="d", path=path)


class TestFilterSkills:
    """Tests for filter_skills()."""

    def test_case_insensitive_name(self) -> None:
        skills = [_skill("PDF-Tools"), _skill("docx")]
        assert filter_skills(skills, ["pdf-tools"]) == [skills[0]]

    def test_sanitized_name(self) -> None:
        skills = [_skill("My Cool Skill!")]
        assert filter_skills(skills, ["my-cool-skill"]) == skills

    def test_directory_name(self) -> None:
        skills = [_skill("Fancy Name", path="/repo/skills/fancy")]
        assert filter_skills(skills, ["fancy"]) == skills

    def test_wildcards(self) -> None:
        skills = [_skill("test-a"), _skill("test-b"), _skill("prod")]
        assert [s.name for s in filter_skills(skills, ["test-*"])] == ["test-a", "test-b"]

    def test_install_name_of_well_known_skill(self) -> None:
        skill = WellKnownSkill(
            name="Display Name", description="d", install_name="wk-skill", source_url="https://x"
        )
        assert filter_skills([skill], ["WK-SKILL"]) == [skill]

    def test_no_match(self) -> None:
        assert filter_skills([_skill("a")], ["b", " "]) == []


def test_display_name_falls_back_to_directory() -> None:
    assert get_skill_display_name(_skill("", path="/repo/skills/fallback")) == "fallback"
    assert get_skill_display_name(_skill("named")) == "named"
