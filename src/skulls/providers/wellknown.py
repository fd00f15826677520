# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Well-known discovery endpoint (RFC 8615 style).

A site publishes ``<base>/.well-known/skills/index.json``::

    {"skills": [{"name": "docs", "description": "...",
                 "files": ["SKILL.md", "reference/api.md"]}]}

and serves every listed file at ``<base>/.well-known/skills/<name>/<file>``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from skulls.core.constants import SKILL_MANIFEST, WELL_KNOWN_INDEX, WELL_KNOWN_PATH
from skulls.core.exceptions import FetchError
from skulls.core.http import fetch_text
from skulls.install.paths import sanitize_name
from skulls.models.skill import WellKnownSkill
from skulls.parsers.skill_parser import parse_manifest

logger = logging.getLogger("skulls.providers.wellknown")


def match(url: str) -> bool:
    return f"/{WELL_KNOWN_PATH}" in urlsplit(url).path


def candidate_bases(url: str) -> list[str]:
    """Return base URLs to probe, most specific first."""
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}"
    path = parts.path
    marker = f"/{WELL_KNOWN_PATH}"
    if marker in path:
        return [origin + path.split(marker, 1)[0].rstrip("/")]
    bases = []
    if path.strip("/"):
        bases.append(origin + path.rstrip("/"))
    bases.append(origin)
    return bases


def get_source_identifier(url: str) -> str:
    return f"wellknown/{urlsplit(url).netloc.lower()}"


def _skill_file_url(base: str, name: str, file_path: str) -> str:
    return f"{base}/{WELL_KNOWN_PATH}/{name}/{file_path}"


def _index_entries(payload: Any) -> list[dict[str, Any]]:
    if not isinstance(payload, dict) or not isinstance(payload.get("skills"), list):
        return []
    return [e for e in payload["skills"] if isinstance(e, dict)]


async def _fetch_index(client: httpx.AsyncClient, url: str) -> tuple[str, list[dict[str, Any]]] | None:
    bases = candidate_bases(url)
    failures: list[FetchError] = []
    for base in bases:
        try:
            text = await fetch_text(client, f"{base}/{WELL_KNOWN_PATH}/{WELL_KNOWN_INDEX}")
        except FetchError as exc:
            logger.warning("No discovery index at %s: %s", base, exc)
            failures.append(exc)
            continue
        if text is None:
            continue
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed discovery index at %s", base)
            continue
        return base, _index_entries(payload)
    if len(failures) == len(bases):
        raise failures[-1]
    return None


async def _fetch_entry(
    client: httpx.AsyncClient, base: str, entry: dict[str, Any]
) -> WellKnownSkill | None:
    name = entry.get("name")
    files = entry.get("files")
    if not isinstance(name, str) or not name.strip() or "/" in name or name in (".", ".."):
        return None
    if not isinstance(files, list) or SKILL_MANIFEST not in files:
        logger.debug("Skipping %s: index entry lists no %s", name, SKILL_MANIFEST)
        return None

    paths = [f for f in files if isinstance(f, str) and f.strip()]
    try:
        bodies = await asyncio.gather(
            *(fetch_text(client, _skill_file_url(base, name, f)) for f in paths)
        )
    except FetchError as exc:
        logger.warning("Skipping %s: %s", name, exc)
        return None

    contents = {path: body for path, body in zip(paths, bodies, strict=True) if body is not None}
    manifest_text = contents.get(SKILL_MANIFEST)
    manifest = parse_manifest(manifest_text, file_path=name) if manifest_text else None
    if manifest is None:
        return None

    return WellKnownSkill(
        name=manifest.name,
        description=manifest.description,
        install_name=sanitize_name(manifest.name),
        source_url=_skill_file_url(base, name, SKILL_MANIFEST),
        files=contents,
        metadata=manifest.metadata,
    )


async def fetch_all_skills(client: httpx.AsyncClient, url: str) -> list[WellKnownSkill]:
    """Fetch every valid skill declared by the discovery index for *url*.

    Returns an empty list when no index exists. Individual entries that fail
    to fetch or validate are skipped.

    Raises
    ------
    FetchError
        If every candidate base failed with an error rather than a 404.
    """
    found = await _fetch_index(client, url)
    if found is None:
        return []
    base, entries = found

    results = await asyncio.gather(*(_fetch_entry(client, base, e) for e in entries))
    return [skill for skill in results if skill is not None]
