# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Mintlify documentation-site provider.

Mintlify sites serve a generated ``/skill.md`` whose frontmatter carries
``metadata.mintlify-proj``; that project id becomes the install name.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from skulls.core.constants import SourceType
from skulls.core.http import fetch_text
from skulls.install.paths import sanitize_name
from skulls.models.skill import RemoteSkill
from skulls.parsers.skill_parser import parse_manifest
from skulls.providers.base import HostProvider

PROJECT_KEY = "mintlify-proj"

# Hosts with their own conventions are never Mintlify sites.
_EXCLUDED_HOSTS = frozenset({"github.com", "gitlab.com", "huggingface.co", "raw.githubusercontent.com"})


def match(url: str) -> bool:
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return False
    if parts.netloc.lower() in _EXCLUDED_HOSTS:
        return False
    return parts.path.endswith("/skill.md")


def to_raw_url(url: str) -> str:
    return url


def get_source_identifier(url: str) -> str:
    return f"mintlify/{urlsplit(url).netloc.lower()}"


async def fetch_skill(client: httpx.AsyncClient, url: str) -> RemoteSkill | None:
    content = await fetch_text(client, to_raw_url(url))
    if content is None:
        return None
    manifest = parse_manifest(content, file_path=url)
    if manifest is None:
        return None
    project = manifest.metadata.get(PROJECT_KEY)
    if not isinstance(project, str) or not project.strip():
        return None

    return RemoteSkill(
        name=manifest.name,
        description=manifest.description,
        content=content,
        install_name=sanitize_name(project),
        source_url=url,
        provider_id=SourceType.MINTLIFY,
        source_identifier=get_source_identifier(url),
        metadata=manifest.metadata,
    )


mintlify_provider = HostProvider(
    id=SourceType.MINTLIFY,
    display_name="Mintlify",
    match=match,
    fetch_skill=fetch_skill,
    to_raw_url=to_raw_url,
    get_source_identifier=get_source_identifier,
)
