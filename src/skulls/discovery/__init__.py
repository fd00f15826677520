# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Skill discovery in local directory trees."""

from skulls.discovery.skills import discover_skills, filter_skills, get_skill_display_name

__all__ = ["discover_skills", "filter_skills", "get_skill_display_name"]
