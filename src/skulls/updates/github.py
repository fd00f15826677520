# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Folder fingerprints from the GitHub git-trees API.

The fingerprint of a skill is the git tree SHA of its directory, so it
changes whenever any file below that directory changes, without
downloading file contents.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Callable
from typing import Any

import httpx

from skulls.core.config import Settings
from skulls.core.constants import DEFAULT_BRANCHES, SKILL_MANIFEST
from skulls.core.exceptions import UpdateCheckError
from skulls.core.http import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger("skulls.updates.github")

GITHUB_API_URL = "https://api.github.com"


def get_github_token(settings: Settings) -> str | None:
    """Token from the environment, else from ``gh auth token`` when allowed."""
    if settings.github_token:
        return settings.github_token
    if not settings.use_gh_cli:
        return None
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=False,
            timeout=5,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.debug("gh credential helper unavailable: %s", exc)
        return None
    token = result.stdout.strip()
    return token if result.returncode == 0 and token else None


def skill_folder(skill_path: str) -> str:
    """Strip a trailing ``SKILL.md`` and slashes from a lock ``skillPath``."""
    folder = skill_path.replace("\\", "/")
    if folder.endswith(SKILL_MANIFEST):
        folder = folder[: -len(SKILL_MANIFEST)]
    folder = folder.strip("/")
    while folder.startswith("./"):
        folder = folder[2:]
    return folder


class GitHubTreeClient:
    """Async client for recursive tree listings.

    Listings are cached per ``(owner/repo, branch)`` for the lifetime of the
    client, so checking many skills from one repository costs one request
    per branch.

    Parameters
    ----------
    api_url:
        Override the API base URL (useful for testing).
    token:
        Optional bearer token.
    token_loader:
        Called once, on first request, when no *token* is given.
    branches:
        Candidate branch names, tried in order.
    timeout:
        HTTP timeout in seconds.
    """

    def __init__(
        self,
        api_url: str = GITHUB_API_URL,
        token: str | None = None,
        token_loader: Callable[[], str | None] | None = None,
        branches: tuple[str, ...] | list[str] = DEFAULT_BRANCHES,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self._token = token
        self._token_loader = token_loader
        self.branches = tuple(branches)
        self.timeout = timeout
        self._trees: dict[tuple[str, str], dict[str, Any] | None] = {}
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> GitHubTreeClient:
        return cls(
            api_url=settings.github_api_url,
            token_loader=lambda: get_github_token(settings),
            branches=settings.default_branches,
            timeout=settings.http_timeout,
        )

    @property
    def token(self) -> str | None:
        if self._token is None and self._token_loader is not None:
            self._token = self._token_loader() or ""
            self._token_loader = None
        return self._token or None

    def _client(self) -> httpx.AsyncClient:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), headers=headers)

    async def _request_tree(self, owner_repo: str, branch: str) -> dict[str, Any] | None:
        url = f"{self.api_url}/repos/{owner_repo}/git/trees/{branch}"
        try:
            async with self._client() as client:
                resp = await client.get(url, params={"recursive": "1"})
        except httpx.HTTPError as exc:
            raise UpdateCheckError(f"GitHub API request failed for {owner_repo}: {exc}") from exc

        if not resp.is_success:
            logger.debug("No tree for %s@%s: HTTP %d", owner_repo, branch, resp.status_code)
            return None
        try:
            data = resp.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    async def fetch_tree(self, owner_repo: str, branch: str) -> dict[str, Any] | None:
        """Return the recursive tree listing of *branch*, or None."""
        key = (owner_repo, branch)
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            if key not in self._trees:
                self._trees[key] = await self._request_tree(owner_repo, branch)
            return self._trees[key]

    async def resolve_skill_folder(
        self, owner_repo: str, skill_path: str
    ) -> tuple[str, str] | None:
        """Return ``(tree_sha, branch)`` for the skill's folder, or None.

        Raises
        ------
        UpdateCheckError
            If the API cannot be reached.
        """
        folder = skill_folder(skill_path)
        for branch in self.branches:
            tree = await self.fetch_tree(owner_repo, branch)
            if tree is None:
                continue
            if not folder:
                sha = tree.get("sha")
                return (sha, branch) if isinstance(sha, str) and sha else None
            for entry in tree.get("tree", []):
                if (
                    isinstance(entry, dict)
                    and entry.get("type") == "tree"
                    and entry.get("path") == folder
                    and isinstance(entry.get("sha"), str)
                ):
                    return entry["sha"], branch
        return None

    async def fetch_skill_folder_hash(self, owner_repo: str, skill_path: str) -> str | None:
        """Return the tree SHA of the skill's folder, or None if not found."""
        resolved = await self.resolve_skill_folder(owner_repo, skill_path)
        return resolved[0] if resolved else None
