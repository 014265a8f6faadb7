"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

LLM runtime settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .retry import RetryPolicy

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class LLMSettings:
    """Explicit settings used by providers and orchestrators."""

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    verbose: bool = False

    max_retries: int = 6
    min_delay_s: float = 4.0
    max_delay_s: float = 10.0

    redis_url: str = "redis://localhost:6379/0"

    @staticmethod
    def from_env() -> "LLMSettings":
        """Load settings from environment variables."""
        return LLMSettings(
            openai_api_key=os.getenv("LINKCHAIN_OPENAI_API_KEY")
            or os.getenv("OPENAI_API_KEY"),
            openai_base_url=os.getenv("LINKCHAIN_OPENAI_BASE_URL"),
            verbose=os.getenv("LINKCHAIN_VERBOSE", "").strip().lower() in _TRUTHY,
            max_retries=int(os.getenv("LINKCHAIN_MAX_RETRIES", "6")),
            min_delay_s=float(os.getenv("LINKCHAIN_RETRY_MIN_DELAY_S", "4")),
            max_delay_s=float(os.getenv("LINKCHAIN_RETRY_MAX_DELAY_S", "10")),
            redis_url=os.getenv("LINKCHAIN_REDIS_URL", "redis://localhost:6379/0"),
        )

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy described by these settings."""
        return RetryPolicy(
            max_attempts=self.max_retries,
            min_delay_s=self.min_delay_s,
            max_delay_s=self.max_delay_s,
        )
