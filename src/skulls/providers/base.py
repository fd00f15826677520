# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Host provider records and the ordered provider registry."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

import httpx

from skulls.models.skill import RemoteSkill

FetchSkill = Callable[[httpx.AsyncClient, str], Awaitable[RemoteSkill | None]]


@dataclass(frozen=True)
class HostProvider:
    """A hosting convention that serves single-document skills.

    ``fetch_skill`` returns ``None`` when the document is reachable but is
    not a valid skill, and raises ``FetchError`` when the host cannot be
    reached.
    """

    id: str
    display_name: str
    match: Callable[[str], bool]
    fetch_skill: FetchSkill
    to_raw_url: Callable[[str], str]
    get_source_identifier: Callable[[str], str]


@dataclass
class ProviderRegistry:
    """Providers in registration order; the first match wins."""

    providers: list[HostProvider] = field(default_factory=list)

    def register(self, provider: HostProvider) -> None:
        if any(p.id == provider.id for p in self.providers):
            raise ValueError(f"Provider already registered: {provider.id}")
        self.providers.append(provider)

    def find_provider(self, url: str) -> HostProvider | None:
        for provider in self.providers:
            if provider.match(url):
                return provider
        return None

    def matches(self, url: str) -> bool:
        return self.find_provider(url) is not None

    def __iter__(self):
        return iter(self.providers)

    @classmethod
    def of(cls, providers: Iterable[HostProvider]) -> ProviderRegistry:
        registry = cls()
        for provider in providers:
            registry.register(provider)
        return registry
