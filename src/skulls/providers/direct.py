# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Fallback for direct ``.md`` URLs that no registered provider claims."""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from skulls.core.constants import SourceType
from skulls.core.http import fetch_text
from skulls.install.paths import sanitize_name
from skulls.models.skill import RemoteSkill
from skulls.parsers.skill_parser import parse_manifest
from skulls.providers.base import HostProvider
from skulls.providers.mintlify import PROJECT_KEY


def match(url: str) -> bool:
    return urlsplit(url).path.lower().endswith(".md")


def to_raw_url(url: str) -> str:
    return url


def get_source_identifier(url: str) -> str:
    return url


async def fetch_skill(client: httpx.AsyncClient, url: str) -> RemoteSkill | None:
    content = await fetch_text(client, url)
    if content is None:
        return None
    manifest = parse_manifest(content, file_path=url)
    if manifest is None:
        return None

    # Older Mintlify sites serve arbitrary .md paths with the project id.
    project = manifest.metadata.get(PROJECT_KEY)
    if isinstance(project, str) and project.strip():
        install_name = sanitize_name(project)
        provider_id = str(SourceType.MINTLIFY)
        source_identifier = f"mintlify/{install_name}"
    else:
        install_name = sanitize_name(manifest.name)
        provider_id = str(SourceType.DIRECT_URL)
        source_identifier = get_source_identifier(url)

    return RemoteSkill(
        name=manifest.name,
        description=manifest.description,
        content=content,
        install_name=install_name,
        source_url=url,
        provider_id=provider_id,
        source_identifier=source_identifier,
        metadata=manifest.metadata,
    )


direct_provider = HostProvider(
    id=SourceType.DIRECT_URL,
    display_name="Direct URL",
    match=match,
    fetch_skill=fetch_skill,
    to_raw_url=to_raw_url,
    get_source_identifier=get_source_identifier,
)
