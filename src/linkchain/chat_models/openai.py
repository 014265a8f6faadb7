"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

OpenAI chat completions model.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..llms.errors import ProviderInvocationError
from ..llms.providers.openai import build_openai_client, usage_to_dict, validate_params
from ..llms.retry import RetryPolicy, call_with_retry, is_transient_error
from ..llms.types import ROLES, ChatGeneration, ChatMessage, ChatResult
from .base import BaseChatModel


class ChatOpenAIParams(BaseModel):
    """Request parameters of an OpenAI chat model."""

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    model_name: str = "gpt-3.5-turbo"
    temperature: float = Field(default=0.7, ge=0)
    max_tokens: int | None = Field(default=None, ge=1)
    top_p: float = Field(default=1.0, ge=0, le=1)
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    n: int = Field(default=1, ge=1)


class ChatOpenAI(BaseChatModel):
    """Chat model backed by `client.chat.completions.create`."""

    def __init__(
        self,
        *,
        client: Any = None,
        retry_policy: RetryPolicy | None = None,
        name: str | None = None,
        callback_manager=None,
        verbose: bool | None = None,
        settings=None,
        **params: Any,
    ) -> None:
        super().__init__(
            name=name,
            callback_manager=callback_manager,
            verbose=verbose,
            settings=settings,
        )
        self.params: ChatOpenAIParams = validate_params(ChatOpenAIParams, params)
        self.retry_policy = retry_policy or self.settings.retry_policy()
        self._client = client

    def _build_client(self) -> Any:
        if self._client is None:
            self._client = build_openai_client(self.settings)
        return self._client

    def _payload(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None,
        options: dict[str, Any],
    ) -> dict[str, Any]:
        p = self.params
        payload: dict[str, Any] = {
            "model": p.model_name,
            "messages": [{"role": m.role, "content": m.text} for m in messages],
            "temperature": p.temperature,
            "top_p": p.top_p,
            "frequency_penalty": p.frequency_penalty,
            "presence_penalty": p.presence_penalty,
            "n": p.n,
        }
        if p.max_tokens is not None:
            payload["max_tokens"] = p.max_tokens
        if stop:
            payload["stop"] = list(stop)
        payload.update(options)
        return payload

    async def _generate(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatResult:
        client = self._build_client()
        payload = self._payload(messages, stop, options)
        response = await call_with_retry(
            lambda: client.chat.completions.create(**payload),
            policy=self.retry_policy,
            should_retry=is_transient_error,
        )
        if not response.choices:
            raise ProviderInvocationError("Chat completion returned no choices")

        generations = []
        for choice in response.choices:
            role = getattr(choice.message, "role", None) or "assistant"
            generations.append(
                ChatGeneration(
                    message=ChatMessage(
                        text=choice.message.content or "",
                        role=role if role in ROLES else "assistant",
                    ),
                    generation_info={"finish_reason": getattr(choice, "finish_reason", None)},
                )
            )
        return ChatResult(
            generations=generations,
            llm_output={
                "token_usage": usage_to_dict(getattr(response, "usage", None)),
                "model": getattr(response, "model", None),
            },
        )
