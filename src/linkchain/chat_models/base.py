"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Chat model orchestrator over role-tagged message sequences.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..llms.callbacks import CallbackManager, default_callback_manager
from ..llms.errors import InvalidArgumentError
from ..llms.settings import LLMSettings
from ..llms.types import ROLES, ChatGeneration, ChatMessage, ChatResult, Role
from ..utils import run_sync


def _validate_messages(messages: Any) -> list[ChatMessage]:
    if not isinstance(messages, (list, tuple)):
        raise InvalidArgumentError(
            "Argument 'messages' is expected to be a list of ChatMessage"
        )
    for message in messages:
        if not isinstance(message, ChatMessage):
            raise InvalidArgumentError(
                f"Every message must be a ChatMessage, got {type(message).__name__}"
            )
        if message.role not in ROLES:
            raise InvalidArgumentError(f"Unknown chat role '{message.role}'")
    return list(messages)


class BaseChatModel(ABC):
    """
    Chat model wrapper. There is no cache layer: every `generate` call
    reaches the provider.
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        callback_manager: CallbackManager | None = None,
        verbose: bool | None = None,
        settings: LLMSettings | None = None,
    ) -> None:
        self.settings = settings or LLMSettings.from_env()
        self.name = name or type(self).__name__
        self.callback_manager = callback_manager or default_callback_manager()
        self.verbose = self.settings.verbose if verbose is None else verbose

    @abstractmethod
    async def _generate(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatResult: ...

    async def generate(
        self,
        messages: Sequence[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatResult:
        message_list = _validate_messages(messages)
        self.callback_manager.on_llm_start(
            {"name": self.name},
            [m.text for m in message_list],
            verbose=self.verbose,
        )
        try:
            result = await self._generate(message_list, stop, **options)
        except Exception as error:
            self.callback_manager.on_llm_error(str(error), verbose=self.verbose)
            raise
        self.callback_manager.on_llm_end(result, verbose=self.verbose)
        return result

    async def run(
        self,
        messages: Sequence[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatMessage:
        """Return the first message produced for `messages`."""
        result = await self.generate(messages, stop, **options)
        return result.generations[0].message

    def run_sync(
        self,
        messages: Sequence[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatMessage:
        """Synchronous wrapper around `run`."""
        return run_sync(self.run(messages, stop, **options))


class SimpleChatModel(BaseChatModel):
    """Chat model base that only needs `_call` returning the reply text."""

    def __init__(self, *, role: Role = "assistant", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.role: Role = role

    @abstractmethod
    async def _call(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> str: ...

    async def _generate(
        self,
        messages: list[ChatMessage],
        stop: list[str] | None = None,
        **options: Any,
    ) -> ChatResult:
        text = await self._call(messages, stop, **options)
        return ChatResult(
            generations=[ChatGeneration(message=ChatMessage(text=text, role=self.role))]
        )
