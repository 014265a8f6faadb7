"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: utils.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run one coroutine to completion from synchronous code."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    coro.close()
    raise RuntimeError(
        "Synchronous wrappers cannot run inside an active event loop; "
        "await the async method instead"
    )


def backoff_delay(attempt: int, min_delay_s: float, max_delay_s: float) -> float:
    """Capped exponential delay for a zero-based attempt index."""
    return min(max_delay_s, min_delay_s * (2 ** max(0, attempt)))


def chunk_list(items: Sequence[T], size: int) -> list[list[T]]:
    """Split `items` into consecutive chunks of at most `size` rows."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]
