# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared httpx client construction and text fetching."""

from __future__ import annotations

import logging

import httpx

from skulls import __version__
from skulls.core.exceptions import FetchError

logger = logging.getLogger("skulls.core.http")

DEFAULT_TIMEOUT = 15.0
USER_AGENT = f"skulls/{__version__}"


def make_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


async def fetch_text(client: httpx.AsyncClient, url: str) -> str | None:
    """GET *url* and return its body.

    Returns ``None`` on 404 so callers can tell "not there" from "host
    unreachable".

    Raises
    ------
    FetchError
        On transport errors and any other non-2xx status.
    """
    try:
        resp = await client.get(url)
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    if resp.status_code == 404:
        logger.debug("Not found: %s", url)
        return None
    if not resp.is_success:
        raise FetchError(
            f"Failed to fetch {url}: HTTP {resp.status_code}",
            status_code=resp.status_code,
        )
    return resp.text
