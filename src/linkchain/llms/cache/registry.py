"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/registry.py.
"""

from __future__ import annotations

from .base import LLMCache
from .inmemory import InMemoryLLMCache
from .redis import RedisLLMCache
from ..errors import LLMCacheError
from ..settings import LLMSettings


def create_llm_cache(
    backend: str | LLMCache | None = None,
    *,
    settings: LLMSettings | None = None,
) -> LLMCache:
    """
    Resolve a cache backend from an id or instance.

    Each call builds a new backend; share the returned object explicitly
    between the models that should see the same entries.
    """
    if backend is None:
        return InMemoryLLMCache()
    if not isinstance(backend, str):
        return backend

    key = backend.strip().lower()
    if key == InMemoryLLMCache.backend_id:
        return InMemoryLLMCache()
    if key == RedisLLMCache.backend_id:
        resolved = settings or LLMSettings.from_env()
        return RedisLLMCache.from_url(resolved.redis_url)
    raise LLMCacheError(f"Unknown LLM cache backend '{backend}'")


def list_llm_cache_backends() -> list[str]:
    """List built-in cache backend ids."""
    return sorted([InMemoryLLMCache.backend_id, RedisLLMCache.backend_id])
