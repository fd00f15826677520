# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for skulls."""

from __future__ import annotations


class SkullsError(Exception):
    """Base exception for all skulls errors."""


class ParseError(SkullsError):
    """Unrecognized source string or unreadable SKILL.md file."""


class FetchError(SkullsError):
    """Failed to fetch a source, or the fetched document is not a skill."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SourceNotFoundError(FetchError):
    """A local source path does not exist."""


class GitCloneError(FetchError):
    """``git clone`` failed."""


class DiscoveryEmptyError(SkullsError):
    """No valid skills were found in a source."""


class PathSafetyError(SkullsError):
    """A computed path resolves outside its base directory."""


class InstallError(SkullsError):
    """Filesystem failure while installing a skill."""


class LockWriteError(SkullsError):
    """The lock file could not be persisted."""


class UpdateCheckError(SkullsError):
    """A remote fingerprint could not be fetched."""


class SearchError(SkullsError):
    """The skills search API failed."""


class NoMatchingSkillsError(SkullsError):
    """An explicit skill filter matched nothing."""

    def __init__(self, filters: list[str], available: list[str]) -> None:
        self.filters = filters
        self.available = available
        super().__init__(
            f"No matching skills found for: {', '.join(filters)}. "
            f"Available skills: {', '.join(available) or 'none'}"
        )


class SelectionRequiredError(SkullsError):
    """Several skills were found and nothing decided which to install."""


class OperationCancelled(SkullsError):
    """The user aborted an interactive prompt."""
