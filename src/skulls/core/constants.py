# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, file names, and discovery constants."""

from enum import StrEnum


class SourceKind(StrEnum):
    """Classification of a parsed source string."""

    LOCAL = "local"
    GITHUB = "github"
    GITLAB = "gitlab"
    GENERIC_GIT = "generic-git"
    DIRECT_URL = "direct-url"
    WELL_KNOWN = "well-known"


class SourceType(StrEnum):
    """Provenance tag stored in lock entries.

    Provider ids (``huggingface``, ``mintlify``) are stored verbatim as well,
    so lock entries keep ``source_type`` as a plain string.
    """

    LOCAL = "local"
    GITHUB = "github"
    GITLAB = "gitlab"
    GENERIC_GIT = "generic-git"
    WELL_KNOWN = "well-known"
    DIRECT_URL = "direct-url"
    MINTLIFY = "mintlify"
    HUGGINGFACE = "huggingface"


# Lock store schema. Anything older is discarded on read.
LOCK_VERSION = 3
LOCK_FILE_NAME = ".skill-lock.json"
AGENTS_DIR = ".agents"
SKILLS_SUBDIR = "skills"

SKILL_MANIFEST = "SKILL.md"

# Files never copied into an installed skill.
EXCLUDED_FILES = frozenset({"README.md", "metadata.json"})
EXCLUDED_DIRS = frozenset({".git"})

# Directories never descended during discovery.
SKIP_DIRS = frozenset({".git", "node_modules", "__pycache__", "dist", "build"})

# Conventional skill containers searched one level deep.
CONTAINER_DIRS = (
    "skills",
    "skills/.curated",
    "skills/.experimental",
    "skills/.system",
    ".agents/skills",
    ".claude/skills",
)

PLUGIN_DIR = ".claude-plugin"
MARKETPLACE_MANIFEST = "marketplace.json"
PLUGIN_MANIFEST = "plugin.json"

WELL_KNOWN_PATH = ".well-known/skills"
WELL_KNOWN_INDEX = "index.json"

MAX_NAME_LENGTH = 255
FALLBACK_NAME = "unnamed-skill"

DEFAULT_BRANCHES = ("main", "master")
