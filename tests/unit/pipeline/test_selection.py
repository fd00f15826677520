# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for skill selection precedence."""

from __future__ import annotations

import pytest

from skulls.core.exceptions import NoMatchingSkillsError, OperationCancelled, SelectionRequiredError
from skulls.models.skill import Skill
from skulls.pipeline.selection import select_skills


def _skills(*names: str) -> list[Skill]:
    return [Skill(name=n, description="d", path=f"/repo/{n}") for n in names]


class TestSelectSkills:
    """Tests for select_skills()."""

    def test_wildcard_selects_all(self) -> None:
        skills = _skills("a", "b")
        assert select_skills(skills, ["nope", "*"]) == skills

    def test_filter_selects_matches(self) -> None:
        skills = _skills("a", "b", "c")
        assert [s.name for s in select_skills(skills, ["B", "c"])] == ["b", "c"]

    def test_filter_without_match_lists_available(self) -> None:
        with pytest.raises(NoMatchingSkillsError) as exc_info:
            select_skills(_skills("a", "b"), ["zzz"])
        assert exc_info.value.available == ["a", "b"]
        assert "Available skills: a, b" in str(exc_info.value)

    def test_filter_beats_single_skill(self) -> None:
        with pytest.raises(NoMatchingSkillsError):
            select_skills(_skills("only"), ["other"])

    def test_single_skill_is_automatic(self) -> None:
        skills = _skills("only")
        assert select_skills(skills, choose=lambda s: []) == skills

    def test_yes_selects_all(self) -> None:
        skills = _skills("a", "b")
        assert select_skills(skills, yes=True) == skills

    def test_chooser_decides(self) -> None:
        skills = _skills("a", "b")
        assert select_skills(skills, choose=lambda s: s[1:]) == skills[1:]

    def test_empty_choice_cancels(self) -> None:
        with pytest.raises(OperationCancelled):
            select_skills(_skills("a", "b"), choose=lambda s: [])

    def test_no_chooser_requires_selection(self) -> None:
        with pytest.raises(SelectionRequiredError, match="--skill"):
            select_skills(_skills("a", "b"))
