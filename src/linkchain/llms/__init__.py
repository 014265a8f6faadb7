"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: llms/__init__.py.
"""

from __future__ import annotations

from .base import BaseLLM, SimpleLLM
from .cache import (
    InMemoryLLMCache,
    LLMCache,
    RedisLLMCache,
    create_llm_cache,
    get_cache_key,
    list_llm_cache_backends,
)
from .callbacks import (
    CallbackManager,
    LLMObserver,
    LoggingLLMObserver,
    default_callback_manager,
)
from .errors import (
    InvalidArgumentError,
    LLMCacheError,
    LLMConfigurationError,
    LLMError,
    ProviderInvocationError,
    UnknownProviderTypeError,
)
from .providers import FakeLLM, OpenAI, OpenAIParams
from .registry import (
    deserialize_llm,
    get_llm_factory,
    list_llm_types,
    load_llm,
    register_llm_type,
    save_llm,
)
from .retry import RetryPolicy, call_with_retry, is_transient_error
from .settings import LLMSettings
from .types import (
    ChatGeneration,
    ChatMessage,
    ChatResult,
    Generation,
    LLMResult,
    SerializedLLM,
)


# Built-in provider types.
register_llm_type("openai", OpenAI, overwrite=True)
register_llm_type("fake", FakeLLM, overwrite=True)


__all__ = [
    "BaseLLM",
    "SimpleLLM",
    "OpenAI",
    "OpenAIParams",
    "FakeLLM",
    "LLMSettings",
    "LLMCache",
    "InMemoryLLMCache",
    "RedisLLMCache",
    "create_llm_cache",
    "list_llm_cache_backends",
    "get_cache_key",
    "LLMObserver",
    "LoggingLLMObserver",
    "CallbackManager",
    "default_callback_manager",
    "RetryPolicy",
    "call_with_retry",
    "is_transient_error",
    "register_llm_type",
    "get_llm_factory",
    "list_llm_types",
    "deserialize_llm",
    "save_llm",
    "load_llm",
    "LLMError",
    "InvalidArgumentError",
    "LLMConfigurationError",
    "LLMCacheError",
    "UnknownProviderTypeError",
    "ProviderInvocationError",
    "Generation",
    "LLMResult",
    "ChatMessage",
    "ChatGeneration",
    "ChatResult",
    "SerializedLLM",
]
