# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Async HTTP client for the skills search API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from skulls.core.exceptions import SearchError
from skulls.core.http import DEFAULT_TIMEOUT, USER_AGENT
from skulls.search.models import SearchResult

logger = logging.getLogger("skulls.search.client")

BASE_URL = "https://skills.sh"
DEFAULT_LIMIT = 10


def _check_response(resp: httpx.Response, context: str = "") -> None:
    """Raise SearchError for non-2xx responses."""
    if resp.is_success:
        return
    msg = f"{context}: HTTP {resp.status_code}" if context else f"HTTP {resp.status_code}"
    body = resp.text[:200]
    if body:
        msg = f"{msg} ({body})"
    raise SearchError(msg)


class SkillsSearchClient:
    """Async client for ``GET <base_url>/api/search``.

    Parameters
    ----------
    base_url:
        Override the API base URL (useful for testing).
    timeout:
        HTTP timeout in seconds.
    """

    def __init__(self, base_url: str = BASE_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": USER_AGENT},
        )

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[SearchResult]:
        """Search for skills by keyword."""
        try:
            async with self._client() as client:
                resp = await client.get(
                    f"{self.base_url}/api/search",
                    params={"q": query, "limit": limit},
                )
        except httpx.HTTPError as exc:
            raise SearchError(f"search '{query}': {exc}") from exc

        _check_response(resp, f"search '{query}'")
        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchError(f"search '{query}': invalid JSON response") from exc

        results = []
        for item in data.get("skills", []) if isinstance(data, dict) else []:
            try:
                results.append(SearchResult.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed search hit: %r", item)
        return results
