# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for the skills search API client."""

from __future__ import annotations

import httpx
import pytest
import respx

from skulls.core.exceptions import SearchError
from skulls.search.client import SkillsSearchClient
from skulls.search.models import SearchResult

BASE = "https://search.test"


def _route():
    return respx.get(url__startswith=f"{BASE}/api/search")


class TestSkillsSearchClient:
    """Tests for SkillsSearchClient.search()."""

    @respx.mock
    async def test_parses_hits(self) -> None:
        route = _route().mock(
            return_value=httpx.Response(
                200,
                json={
                    "skills": [
                        {"id": "vercel-labs/agent-skills", "name": "pdf", "installs": 1200, "source": "vercel-labs/agent-skills"},
                        {"id": "acme/tools", "name": "lint"},
                        {"name": "missing-id"},
                    ]
                },
            )
        )
        results = await SkillsSearchClient(base_url=BASE + "/").search("pdf", limit=5)

        assert [r.name for r in results] == ["pdf", "lint"]
        assert results[0].installs == 1200
        params = route.calls[0].request.url.params
        assert params["q"] == "pdf"
        assert params["limit"] == "5"

    @respx.mock
    async def test_http_error_status(self) -> None:
        _route().mock(return_value=httpx.Response(502, text="bad gateway"))
        with pytest.raises(SearchError, match="HTTP 502"):
            await SkillsSearchClient(base_url=BASE).search("x")

    @respx.mock
    async def test_transport_error(self) -> None:
        _route().mock(side_effect=httpx.ConnectTimeout("slow"))
        with pytest.raises(SearchError):
            await SkillsSearchClient(base_url=BASE).search("x")

    @respx.mock
    async def test_invalid_json(self) -> None:
        _route().mock(return_value=httpx.Response(200, text="<html>"))
        with pytest.raises(SearchError, match="invalid JSON"):
            await SkillsSearchClient(base_url=BASE).search("x")

    @respx.mock
    async def test_unexpected_shape_is_empty(self) -> None:
        _route().mock(return_value=httpx.Response(200, json=["not", "a", "dict"]))
        assert await SkillsSearchClient(base_url=BASE).search("x") == []


class TestSearchResult:
    """Tests for SearchResult.install_source."""

    def test_prefers_source(self) -> None:
        hit = SearchResult(id="id/x", name="pdf", source="owner/repo")
        assert hit.install_source == "owner/repo@pdf"

    def test_falls_back_to_id(self) -> None:
        assert SearchResult(id="owner/repo", name="pdf").install_source == "owner/repo@pdf"
