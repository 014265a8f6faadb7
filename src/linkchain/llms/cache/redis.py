"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Redis-backed generation cache for multi-process deployments.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .base import LLMCache
from ..errors import LLMConfigurationError
from ..types import Generation

logger = logging.getLogger("linkchain.llms.cache.redis")


class RedisLLMCache(LLMCache):
    """
    Generation cache stored in Redis as JSON strings.

    Requires ``redis.asyncio`` (``pip install redis``) when built through
    `from_url`; any client exposing async ``get``/``set``/``setex`` works.

    Args:
        redis_client: An ``redis.asyncio.Redis`` compatible client.
        prefix: Key prefix for namespacing.
        ttl_s: Optional expiry; entries never expire when omitted.
    """

    backend_id = "redis"

    def __init__(
        self,
        redis_client: Any,
        *,
        prefix: str = "linkchain:llm-cache",
        ttl_s: float | None = None,
    ) -> None:
        if ttl_s is not None and ttl_s <= 0:
            raise LLMConfigurationError("ttl_s must be > 0")
        self._redis = redis_client
        self._prefix = prefix
        self._ttl_s = ttl_s

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisLLMCache":
        """Build a cache around a fresh ``redis.asyncio`` client."""
        try:
            from redis.asyncio import Redis
        except Exception as e:  # pragma: no cover - environment dependent
            raise LLMConfigurationError(
                "redis package is not installed. Install it with: pip install redis"
            ) from e
        return cls(Redis.from_url(url), **kwargs)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def lookup(self, key: str) -> list[Generation] | None:
        blob = await self._redis.get(self._key(key))
        if blob is None:
            return None
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            rows = json.loads(blob)
        except ValueError:
            logger.warning("Discarding unreadable cache entry %s", key[:12])
            return None
        if not isinstance(rows, list) or not rows or not all(isinstance(row, dict) for row in rows):
            logger.warning("Discarding malformed cache entry %s", key[:12])
            return None
        return [Generation.from_dict(row) for row in rows]

    async def update(self, key: str, value: list[Generation]) -> None:
        payload = json.dumps([g.to_dict() for g in value], ensure_ascii=True, default=str)
        if self._ttl_s is None:
            await self._redis.set(self._key(key), payload)
            return
        await self._redis.setex(self._key(key), int(max(1, self._ttl_s)), payload)
