# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""skulls - Package manager for agent skills (SKILL.md)."""

__version__ = "0.4.0"

__all__ = ["__version__"]
