"""In-memory task provider."""

from .provider import InMemoryTaskProvider, InMemoryTaskProviderSettings, create_memory_provider

__all__ = ["InMemoryTaskProvider", "InMemoryTaskProviderSettings", "create_memory_provider"]
