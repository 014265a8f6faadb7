"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: chat_models/fake.py.
"""

from __future__ import annotations

from typing import Any

from ..llms.errors import ProviderInvocationError
from ..llms.providers.fake import apply_stop
from ..llms.types import ChatMessage
from .base import SimpleChatModel


class FakeChatModel(SimpleChatModel):
    """Replays scripted replies in a cycle, or echoes the last message."""

    def __init__(
        self,
        responses: list[str] | None = None,
        *,
        error: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.responses = list(responses) if responses is not None else None
        self.error = error
        self.calls: list[list[ChatMessage]] = []

    async def _call(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> str:
        _ = options
        self.calls.append(list(messages))
        if self.error is not None:
            raise ProviderInvocationError(self.error)
        if self.responses:
            text = self.responses[(len(self.calls) - 1) % len(self.responses)]
        else:
            text = messages[-1].text if messages else ""
        return apply_stop(text, stop)
