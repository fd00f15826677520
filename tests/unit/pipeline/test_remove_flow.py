# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for removing installed skills."""

from __future__ import annotations

from pathlib import Path

from skulls.lock.store import LockStore
from skulls.models.lock import LockEntry
from skulls.pipeline.remove import match_installed, remove_skills


class TestMatchInstalled:
    """Tests for match_installed()."""

    def test_case_insensitive(self) -> None:
        assert match_installed(["pdf-tools", "docx"], ["PDF-Tools"]) == ["pdf-tools"]

    def test_display_name_matches_sanitized_dir(self) -> None:
        assert match_installed(["my-cool-skill"], ["My Cool Skill!"]) == ["my-cool-skill"]

    def test_unknown_names_ignored(self) -> None:
        assert match_installed(["a"], ["b"]) == []


class TestRemoveSkills:
    """Tests for remove_skills()."""

    def test_removes_directory_and_lock_entry(self, skills_dir: Path, lock_path: Path, make_skill) -> None:
        make_skill(skills_dir / "a", name="a")
        make_skill(skills_dir / "b", name="b")
        store = LockStore(lock_path)
        store.add("a", LockEntry(source="/src", source_type="local"))
        store.add("b", LockEntry(source="/src", source_type="local"))

        results = remove_skills(["a"], skills_dir, store)

        assert [(r.skill, r.success) for r in results] == [("a", True)]
        assert not (skills_dir / "a").exists()
        assert (skills_dir / "b").exists()
        assert list(store.all()) == ["b"]

    def test_untracked_skill_is_still_removed(self, skills_dir: Path, lock_path: Path, make_skill) -> None:
        make_skill(skills_dir / "manual", name="manual")
        results = remove_skills(["manual"], skills_dir, LockStore(lock_path))
        assert results[0].success
        assert not (skills_dir / "manual").exists()

    def test_unsafe_name_is_reported(self, skills_dir: Path, lock_path: Path) -> None:
        skills_dir.mkdir(parents=True)
        results = remove_skills([".."], skills_dir, LockStore(lock_path))
        assert results[0].success is False
        assert results[0].error
