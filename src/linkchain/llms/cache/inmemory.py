"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

from .base import LLMCache
from ..types import Generation


class InMemoryLLMCache(LLMCache):
    """Process-lifetime cache with no eviction, TTL or size bound."""

    backend_id = "inmemory"

    def __init__(self) -> None:
        self._rows: dict[str, list[Generation]] = {}

    def __len__(self) -> int:
        return len(self._rows)

    async def lookup(self, key: str) -> list[Generation] | None:
        row = self._rows.get(key)
        return None if row is None else list(row)

    async def update(self, key: str, value: list[Generation]) -> None:
        self._rows[key] = list(value)

    def clear(self) -> None:
        self._rows.clear()
