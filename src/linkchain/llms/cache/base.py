"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

import hashlib
import json
from typing import Protocol

from ..types import Generation


def get_cache_key(*parts: str) -> str:
    """Hash an arbitrary number of strings into one cache key."""
    normalized = json.dumps(list(parts), ensure_ascii=True)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


class LLMCache(Protocol):
    """
    Protocol implemented by generation caches.

    `lookup` returns `None` for absent keys; neither method raises for a
    missing entry.
    """

    backend_id: str

    async def lookup(self, key: str) -> list[Generation] | None: ...

    async def update(self, key: str, value: list[Generation]) -> None: ...
