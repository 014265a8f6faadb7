"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import LLMCache, get_cache_key
from .inmemory import InMemoryLLMCache
from .redis import RedisLLMCache
from .registry import create_llm_cache, list_llm_cache_backends

__all__ = [
    "LLMCache",
    "InMemoryLLMCache",
    "RedisLLMCache",
    "get_cache_key",
    "create_llm_cache",
    "list_llm_cache_backends",
]
