"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic in-process LLM for tests and offline pipelines.
"""

from __future__ import annotations

from typing import Any

from ..base import SimpleLLM
from ..errors import ProviderInvocationError


def apply_stop(text: str, stop: list[str] | None) -> str:
    """Cut `text` at the earliest stop sequence."""
    if not stop:
        return text
    cut = len(text)
    for token in stop:
        if token and token in text:
            cut = min(cut, text.index(token))
    return text[:cut]


class FakeLLM(SimpleLLM):
    """
    Replays scripted `responses` in a cycle, or echoes the prompt.

    Every prompt that reaches the provider is recorded in `prompts_seen`,
    which makes cache hits observable. Set `error` to make each call raise
    `ProviderInvocationError` with that message.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        *,
        model: str = "fake",
        temperature: float = 0,
        error: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.responses = list(responses) if responses is not None else None
        self.model = model
        self.temperature = temperature
        self.error = error
        self.prompts_seen: list[str] = []

    @property
    def llm_type(self) -> str:
        return "fake"

    @property
    def identifying_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"model": self.model, "temperature": self.temperature}
        if self.responses is not None:
            params["responses"] = list(self.responses)
        return params

    async def _call(
        self,
        prompt: str,
        stop: list[str] | None = None,
        **options: Any,
    ) -> str:
        _ = options
        self.prompts_seen.append(prompt)
        if self.error is not None:
            raise ProviderInvocationError(self.error)
        if self.responses:
            text = self.responses[(len(self.prompts_seen) - 1) % len(self.responses)]
        else:
            text = prompt
        return apply_stop(text, stop)
