"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: retry.py.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from ..utils import backoff_delay
from .errors import LLMConfigurationError, LLMError

T = TypeVar("T")

logger = logging.getLogger("linkchain.llms.retry")


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Exponential backoff bounds for one outbound call path."""

    max_attempts: int = 6
    min_delay_s: float = 4.0
    max_delay_s: float = 10.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise LLMConfigurationError("max_attempts must be >= 1")
        if self.min_delay_s < 0 or self.max_delay_s < 0:
            raise LLMConfigurationError("retry delays must be >= 0")
        if self.min_delay_s > self.max_delay_s:
            raise LLMConfigurationError("min_delay_s must be <= max_delay_s")


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    should_retry: Callable[[Exception], bool] | None = None,
) -> T:
    """
    Await `fn()` until it succeeds or `policy.max_attempts` is spent.

    The last failure is re-raised as-is. `should_retry` can veto a retry
    for errors that will not go away (bad request, auth).
    """
    for attempt in range(policy.max_attempts):
        try:
            return await fn()
        except Exception as error:
            last_attempt = attempt + 1 >= policy.max_attempts
            if last_attempt or (should_retry is not None and not should_retry(error)):
                raise
            delay = backoff_delay(attempt, policy.min_delay_s, policy.max_delay_s)
            logger.warning(
                "Attempt %d/%d failed (%s); retrying in %.2fs",
                attempt + 1,
                policy.max_attempts,
                error,
                delay,
            )
            await asyncio.sleep(delay)
    raise LLMError("Retry loop exhausted")  # pragma: no cover


_TRANSIENT_STATUS = {408, 409, 429}
_TRANSIENT_PHRASES = (
    "rate limit",
    "timeout",
    "timed out",
    "temporarily",
    "overloaded",
    "service unavailable",
    "connection",
)


def is_transient_error(error: Exception) -> bool:
    """Best-effort guess whether retrying `error` can help."""
    if isinstance(error, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
        return True
    status = getattr(error, "status_code", None)
    if isinstance(status, int):
        return status in _TRANSIENT_STATUS or status >= 500
    msg = str(error).lower()
    return any(token in msg for token in _TRANSIENT_PHRASES)
