# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Host providers for skills served outside git repositories."""

from skulls.providers.base import HostProvider, ProviderRegistry
from skulls.providers.direct import direct_provider
from skulls.providers.huggingface import huggingface_provider
from skulls.providers.mintlify import mintlify_provider


def default_registry() -> ProviderRegistry:
    """Return a fresh registry holding the built-in providers."""
    return ProviderRegistry.of([huggingface_provider, mintlify_provider])


__all__ = [
    "HostProvider",
    "ProviderRegistry",
    "default_registry",
    "direct_provider",
    "huggingface_provider",
    "mintlify_provider",
]
