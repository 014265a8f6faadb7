"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Observer hooks fired around every provider invocation.
"""

from __future__ import annotations

import logging
from typing import Any

from .types import ChatResult, LLMResult

logger = logging.getLogger("linkchain.llms.callbacks")


class LLMObserver:
    """
    Lifecycle observer for provider calls.

    Every method is a no-op by default; override the ones you need. Hooks
    are called synchronously and their return value is ignored.
    """

    def on_llm_start(
        self,
        llm: dict[str, Any],
        prompts: list[str],
        *,
        verbose: bool = False,
    ) -> None:
        _ = llm, prompts, verbose

    def on_llm_end(
        self,
        result: LLMResult | ChatResult,
        *,
        verbose: bool = False,
    ) -> None:
        _ = result, verbose

    def on_llm_error(self, error: str, *, verbose: bool = False) -> None:
        _ = error, verbose


class LoggingLLMObserver(LLMObserver):
    """Log call lifecycle through the `linkchain.llms.callbacks` logger."""

    def on_llm_start(self, llm, prompts, *, verbose=False):
        logger.log(
            logging.INFO if verbose else logging.DEBUG,
            "LLM start name=%s prompts=%d",
            llm.get("name"),
            len(prompts),
        )

    def on_llm_end(self, result, *, verbose=False):
        logger.log(
            logging.INFO if verbose else logging.DEBUG,
            "LLM end generations=%d",
            len(result.generations),
        )

    def on_llm_error(self, error, *, verbose=False):
        _ = verbose
        logger.warning("LLM error: %s", error)


class CallbackManager:
    """Fan out lifecycle notifications to observers in registration order."""

    def __init__(self, observers: list[LLMObserver] | None = None) -> None:
        self.observers: list[LLMObserver] = list(observers or [])

    def add_observer(self, observer: LLMObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: LLMObserver) -> None:
        self.observers.remove(observer)

    def on_llm_start(
        self,
        llm: dict[str, Any],
        prompts: list[str],
        *,
        verbose: bool = False,
    ) -> None:
        for observer in self.observers:
            observer.on_llm_start(llm, prompts, verbose=verbose)

    def on_llm_end(self, result: LLMResult | ChatResult, *, verbose: bool = False) -> None:
        for observer in self.observers:
            observer.on_llm_end(result, verbose=verbose)

    def on_llm_error(self, error: str, *, verbose: bool = False) -> None:
        for observer in self.observers:
            observer.on_llm_error(error, verbose=verbose)


def default_callback_manager() -> CallbackManager:
    """Manager with a single logging observer."""
    return CallbackManager([LoggingLLMObserver()])
