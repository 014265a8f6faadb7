"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Base LLM orchestrator: cache lookup, uncached invocation and observers.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..utils import run_sync
from .cache.base import LLMCache, get_cache_key
from .callbacks import CallbackManager, default_callback_manager
from .errors import InvalidArgumentError, LLMConfigurationError, ProviderInvocationError
from .registry import deserialize_llm
from .settings import LLMSettings
from .types import Generation, LLMResult, SerializedLLM


def _validate_prompts(prompts: Any) -> list[str]:
    if isinstance(prompts, (str, bytes)) or not isinstance(prompts, (list, tuple)):
        raise InvalidArgumentError(
            "Argument 'prompts' is expected to be a list of strings"
        )
    for prompt in prompts:
        if not isinstance(prompt, str):
            raise InvalidArgumentError(
                f"Every prompt must be a string, got {type(prompt).__name__}"
            )
    return list(prompts)


def _check_result_size(result: LLMResult, expected: int) -> None:
    if len(result.generations) != expected:
        raise ProviderInvocationError(
            f"Provider returned {len(result.generations)} generation lists "
            f"for {expected} prompts"
        )
    if any(not row for row in result.generations):
        raise ProviderInvocationError("Provider returned an empty generation list")


class BaseLLM(ABC):
    """
    LLM wrapper exposing `generate` (batch) and `call` (single prompt).

    Caching is controlled by `cache`:

    - `None`: use `cache_backend` when one is configured.
    - `True`: require a backend; `generate` fails without one.
    - `False`: never touch the cache.

    Subclasses implement `_generate` and `llm_type`, and usually
    `identifying_params` so that different configurations get different
    cache keys.
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        cache: bool | None = None,
        cache_backend: LLMCache | None = None,
        callback_manager: CallbackManager | None = None,
        verbose: bool | None = None,
        settings: LLMSettings | None = None,
    ) -> None:
        self.settings = settings or LLMSettings.from_env()
        self.name = name or type(self).__name__
        self.cache = cache
        self.cache_backend = cache_backend
        self.callback_manager = callback_manager or default_callback_manager()
        self.verbose = self.settings.verbose if verbose is None else verbose

    @abstractmethod
    async def _generate(
        self,
        prompts: list[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        """Run the provider on `prompts`, one generation list per prompt."""

    @property
    @abstractmethod
    def llm_type(self) -> str:
        """Stable discriminator identifying this class of LLM."""

    @property
    def identifying_params(self) -> dict[str, Any]:
        return {}

    async def _generate_uncached(
        self,
        prompts: list[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        self.callback_manager.on_llm_start(
            {"name": self.name},
            prompts,
            verbose=self.verbose,
        )
        try:
            output = await self._generate(prompts, stop, **options)
        except Exception as error:
            self.callback_manager.on_llm_error(str(error), verbose=self.verbose)
            raise
        self.callback_manager.on_llm_end(output, verbose=self.verbose)
        return output

    def _llm_string(self, stop: list[str] | None) -> str:
        params = {**self.serialize(), "stop": stop}
        return json.dumps(params, ensure_ascii=True, sort_keys=True, default=str)

    async def generate(
        self,
        prompts: Sequence[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        """
        Run the LLM on `prompts`, serving repeated prompts from the cache.

        Only cache misses reach the provider (and the observers); a prompt
        repeated within one batch is computed once. An empty batch returns
        an empty result without calling either. Results come back in
        input order. A provider failure fails the whole batch and nothing
        from it is cached.
        """
        prompt_list = _validate_prompts(prompts)

        if self.cache is True and self.cache_backend is None:
            raise LLMConfigurationError("Requested cache, but no cache backend is configured")

        if not prompt_list:
            return LLMResult(generations=[])

        if self.cache is False or self.cache_backend is None:
            result = await self._generate_uncached(prompt_list, stop, **options)
            _check_result_size(result, len(prompt_list))
            return result

        llm_string = self._llm_string(stop)
        generations: list[list[Generation] | None] = []
        missing: dict[str, list[int]] = {}
        for index, prompt in enumerate(prompt_list):
            key = get_cache_key(prompt, llm_string)
            cached = await self.cache_backend.lookup(key) or None
            generations.append(cached)
            if cached is None:
                missing.setdefault(key, []).append(index)

        llm_output: dict[str, Any] = {}
        if missing:
            pending = [prompt_list[indices[0]] for indices in missing.values()]
            result = await self._generate_uncached(pending, stop, **options)
            _check_result_size(result, len(pending))
            for (key, indices), generation in zip(missing.items(), result.generations):
                for index in indices:
                    generations[index] = generation
                await self.cache_backend.update(key, generation)
            llm_output = dict(result.llm_output)

        return LLMResult(
            generations=[row for row in generations if row is not None],
            llm_output=llm_output,
        )

    async def call(
        self,
        prompt: str,
        stop: list[str] | None = None,
        **options: Any,
    ) -> str:
        """Run one prompt and return the text of its first generation."""
        result = await self.generate([prompt], stop, **options)
        return result.generations[0][0].text

    def generate_sync(
        self,
        prompts: Sequence[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        """Synchronous wrapper around `generate`."""
        return run_sync(self.generate(prompts, stop, **options))

    def call_sync(self, prompt: str, stop: list[str] | None = None, **options: Any) -> str:
        """Synchronous wrapper around `call`."""
        return run_sync(self.call(prompt, stop, **options))

    def serialize(self) -> SerializedLLM:
        """Return a JSON-like description of this LLM's configuration."""
        return {**self.identifying_params, "_type": self.llm_type}

    @staticmethod
    def deserialize(data: SerializedLLM, **kwargs: Any) -> "BaseLLM":
        """Rebuild an LLM from `serialize()` output via the type registry."""
        return deserialize_llm(data, **kwargs)


class SimpleLLM(BaseLLM):
    """
    LLM base that only needs a per-prompt `_call`.

    Prompts are sent one at a time, in order.
    """

    @abstractmethod
    async def _call(
        self,
        prompt: str,
        stop: list[str] | None = None,
        **options: Any,
    ) -> str: ...

    async def _generate(
        self,
        prompts: list[str],
        stop: list[str] | None = None,
        **options: Any,
    ) -> LLMResult:
        generations = []
        for prompt in prompts:
            text = await self._call(prompt, stop, **options)
            generations.append([Generation(text=text)])
        return LLMResult(generations=generations)
