# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Choose which discovered skills to install."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from skulls.core.exceptions import NoMatchingSkillsError, OperationCancelled, SelectionRequiredError
from skulls.discovery.skills import filter_skills

SkillT = TypeVar("SkillT")

Chooser = Callable[[list[SkillT]], list[SkillT]]

WILDCARD = "*"


def select_skills(
    skills: Sequence[SkillT],
    filters: Sequence[str] = (),
    *,
    yes: bool = False,
    choose: Chooser | None = None,
) -> list[SkillT]:
    """Apply selection precedence to *skills*.

    1. ``*`` among the filters selects everything.
    2. Other filters select their matches and fail if nothing matches.
    3. A single skill is selected automatically.
    4. *yes* selects everything.
    5. Otherwise *choose* decides; without a chooser the caller must have
       supplied a filter or *yes*.

    Raises
    ------
    NoMatchingSkillsError
        If explicit filters match nothing.
    SelectionRequiredError
        If several skills remain undecided and no chooser is available.
    OperationCancelled
        If the chooser returns nothing.
    """
    skills = list(skills)
    if WILDCARD in filters:
        return skills
    if filters:
        matched = filter_skills(skills, filters)
        if not matched:
            raise NoMatchingSkillsError(list(filters), [s.name for s in skills])
        return matched
    if len(skills) == 1:
        return skills
    if yes:
        return skills
    if choose is None:
        raise SelectionRequiredError(
            f"Found {len(skills)} skills. Pass --skill <name>, --skill '*' or --yes to choose."
        )
    chosen = choose(skills)
    if not chosen:
        raise OperationCancelled("No skills selected")
    return chosen
