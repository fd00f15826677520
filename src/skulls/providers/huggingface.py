# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Hugging Face Spaces provider.

Matches ``https://huggingface.co/spaces/<owner>/<repo>/blob/<ref>/.../SKILL.md``.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from skulls.core.constants import SKILL_MANIFEST, SourceType
from skulls.core.http import fetch_text
from skulls.install.paths import sanitize_name
from skulls.models.skill import RemoteSkill
from skulls.parsers.skill_parser import parse_manifest
from skulls.providers.base import HostProvider

HOST = "huggingface.co"


def _space_parts(url: str) -> tuple[str, str] | None:
    parts = urlsplit(url)
    if parts.netloc.lower() != HOST:
        return None
    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 3 or segments[0] != "spaces":
        return None
    return segments[1], segments[2]


def match(url: str) -> bool:
    return _space_parts(url) is not None and urlsplit(url).path.lower().endswith(
        f"/{SKILL_MANIFEST.lower()}"
    )


def to_raw_url(url: str) -> str:
    return url.replace("/blob/", "/raw/", 1)


def get_source_identifier(url: str) -> str:
    parts = _space_parts(url)
    if parts is None:
        return "huggingface"
    return f"huggingface/{parts[0]}/{parts[1]}"


async def fetch_skill(client: httpx.AsyncClient, url: str) -> RemoteSkill | None:
    content = await fetch_text(client, to_raw_url(url))
    if content is None:
        return None
    manifest = parse_manifest(content, file_path=url)
    if manifest is None:
        return None

    parts = _space_parts(url)
    repo = parts[1] if parts else manifest.name
    install_name = manifest.metadata.get("install-name")
    return RemoteSkill(
        name=manifest.name,
        description=manifest.description,
        content=content,
        install_name=sanitize_name(install_name if isinstance(install_name, str) else repo),
        source_url=url,
        provider_id=SourceType.HUGGINGFACE,
        source_identifier=get_source_identifier(url),
        metadata=manifest.metadata,
    )


huggingface_provider = HostProvider(
    id=SourceType.HUGGINGFACE,
    display_name="Hugging Face",
    match=match,
    fetch_skill=fetch_skill,
    to_raw_url=to_raw_url,
    get_source_identifier=get_source_identifier,
)
