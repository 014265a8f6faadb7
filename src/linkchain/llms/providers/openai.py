"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

OpenAI completion LLM built on `openai.AsyncOpenAI`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...utils import chunk_list
from ..base import BaseLLM
from ..errors import LLMConfigurationError, ProviderInvocationError
from ..retry import RetryPolicy, call_with_retry, is_transient_error
from ..settings import LLMSettings
from ..types import Generation, LLMResult


def build_openai_client(settings: LLMSettings) -> Any:
    """Construct an AsyncOpenAI client from shared settings."""
    if not settings.openai_api_key:
        raise LLMConfigurationError(
            "OpenAI API key not found. Set LINKCHAIN_OPENAI_API_KEY or OPENAI_API_KEY"
        )
    try:
        from openai import AsyncOpenAI
    except Exception as e:  # pragma: no cover - environment dependent
        raise LLMConfigurationError(
            "openai package is not installed. Install it with: pip install openai"
        ) from e

    kwargs: dict[str, Any] = {"api_key": settings.openai_api_key, "max_retries": 0}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


def validate_params(model: type[BaseModel], params: dict[str, Any]) -> Any:
    """Validate provider params, reporting failures as configuration errors."""
    try:
        return model(**params)
    except ValidationError as e:
        raise LLMConfigurationError(f"Invalid {model.__name__}: {e}") from e


def usage_to_dict(usage: Any) -> dict[str, int]:
    """Normalize an OpenAI usage object into plain token counters."""
    if usage is None:
        return {}
    out: dict[str, int] = {}
    for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
        value = getattr(usage, key, None)
        if isinstance(value, int):
            out[key] = value
    return out


class OpenAIParams(BaseModel):
    """Identifying parameters of an OpenAI completion model."""

    model_config = ConfigDict(extra="forbid", protected_namespaces=())

    model_name: str = "gpt-3.5-turbo-instruct"
    temperature: float = Field(default=0.7, ge=0)
    max_tokens: int = Field(default=256, ge=1)
    top_p: float = Field(default=1.0, ge=0, le=1)
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    n: int = Field(default=1, ge=1)
    best_of: int = Field(default=1, ge=1)
    batch_size: int = Field(default=20, ge=1)


class OpenAI(BaseLLM):
    """
    Completion-endpoint LLM.

    Prompts are sent in batches of `batch_size`; each request goes through
    the retry wrapper. Pass `client` to reuse an existing AsyncOpenAI
    instance (or a test double).
    """

    def __init__(
        self,
        *,
        client: Any = None,
        retry_policy: RetryPolicy | None = None,
        name: str | None = None,
        cache: bool | None = None,
        cache_backend=None,
        callback_manager=None,
        verbose: bool | None = None,
        settings: LLMSettings | None = None,
        **params: Any,
    ) -> None:
        super().__init__(
            name=name,
            cache=cache,
            cache_backend=cache_backend,
            callback_manager=callback_manager,
            verbose=verbose,
            settings=settings,
        )
        self.params: OpenAIParams = validate_params(OpenAIParams, params)
        self.retry_policy = retry_policy or self.settings.retry_policy()
        self._client = client

    @property
    def llm_type(self) -> str:
        return "openai"

    @property
    def identifying_params(self) -> dict[str, Any]:
        return self.params.model_dump()

    def _build_client(self) -> Any:
        if self._client is None:
            self._client = build_openai_client(self.settings)
        return self._client

    def _payload(self, stop: list[str] | None, options: dict[str, Any]) -> dict[str, Any]:
        p = self.params
        payload: dict[str, Any] = {
            "model": p.model_name,
            "temperature": p.temperature,
            "max_tokens": p.max_tokens,
            "top_p": p.top_p,
            "frequency_penalty": p.frequency_penalty,
            "presence_penalty": p.presence_penalty,
            "n": p.n,
            "best_of": p.best_of,
        }
        if stop:
            payload["stop"] = list(stop)
        payload.update(options)
        return payload

    async def _completion_with_retry(self, payload: dict[str, Any]) -> Any:
        client = self._build_client()
        return await call_with_retry(
            lambda: client.completions.create(**payload),
            policy=self.retry_policy,
            should_retry=is_transient_error,
        )

    async def _generate(
        self,
        prompts: list[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        base_payload = self._payload(stop, options)
        n = int(base_payload.get("n", 1))
        generations: list[list[Generation]] = []
        token_usage: dict[str, int] = {}

        for batch in chunk_list(prompts, self.params.batch_size):
            response = await self._completion_with_retry({**base_payload, "prompt": batch})
            choices = sorted(response.choices, key=lambda c: getattr(c, "index", 0))
            if len(choices) != len(batch) * n:
                raise ProviderInvocationError(
                    f"Expected {len(batch) * n} completion choices, got {len(choices)}"
                )
            for i in range(len(batch)):
                generations.append(
                    [
                        Generation(
                            text=choice.text,
                            generation_info={
                                "finish_reason": getattr(choice, "finish_reason", None),
                                "logprobs": getattr(choice, "logprobs", None),
                            },
                        )
                        for choice in choices[i * n : (i + 1) * n]
                    ]
                )
            for key, value in usage_to_dict(getattr(response, "usage", None)).items():
                token_usage[key] = token_usage.get(key, 0) + value

        return LLMResult(generations=generations, llm_output={"token_usage": token_usage})
