from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from linkchain.chat_models import ChatOpenAI, FakeChatModel
from linkchain.llms import (
    CallbackManager,
    ChatMessage,
    InvalidArgumentError,
    LLMConfigurationError,
    LLMObserver,
    LLMSettings,
    ProviderInvocationError,
    RetryPolicy,
)

FAST = RetryPolicy(max_attempts=2, min_delay_s=0.0, max_delay_s=0.0)


def run_async(coro):
    return asyncio.run(coro)


class _RecordingObserver(LLMObserver):
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_llm_start(self, llm, prompts, *, verbose=False):
        self.events.append(("start", list(prompts)))

    def on_llm_end(self, result, *, verbose=False):
        self.events.append(("end", result.generations[0].message.text))

    def on_llm_error(self, error, *, verbose=False):
        self.events.append(("error", error))


@dataclass
class _Message:
    content: str | None
    role: str = "assistant"


@dataclass
class _Choice:
    message: _Message
    finish_reason: str = "stop"


@dataclass
class _Response:
    choices: list[_Choice]
    model: str = "gpt-test"
    usage: Any = None


@dataclass
class _FakeChatCompletions:
    replies: list[str] = field(default_factory=lambda: ["hi there"])
    failures: int = 0
    payloads: list[dict[str, Any]] = field(default_factory=list)

    async def create(self, **payload):
        self.payloads.append(payload)
        if self.failures:
            self.failures -= 1
            raise ConnectionError("connection reset")
        return _Response(choices=[_Choice(message=_Message(content=r)) for r in self.replies])


class _FakeChatClient:
    def __init__(self, completions: _FakeChatCompletions) -> None:
        self.chat = type("_Chat", (), {"completions": completions})()


def test_run_returns_first_message():
    model = FakeChatModel(["pong"], settings=LLMSettings())

    message = run_async(model.run([ChatMessage(text="ping")]))

    assert message == ChatMessage(text="pong", role="assistant")


def test_every_generate_reaches_the_provider():
    model = FakeChatModel(settings=LLMSettings())
    messages = [ChatMessage(text="be brief", role="system"), ChatMessage(text="hello")]

    run_async(model.generate(messages))
    run_async(model.generate(messages))

    assert len(model.calls) == 2
    assert model.calls[0] == messages


def test_custom_reply_role():
    model = FakeChatModel(["ok"], role="system", settings=LLMSettings())
    assert run_async(model.run([ChatMessage(text="x")])).role == "system"


@pytest.mark.parametrize(
    "messages",
    [
        "hello",
        [{"role": "user", "text": "hello"}],
        [ChatMessage(text="x", role="robot")],  # type: ignore[arg-type]
    ],
)
def test_malformed_messages_raise_invalid_argument(messages):
    model = FakeChatModel(settings=LLMSettings())
    with pytest.raises(InvalidArgumentError):
        run_async(model.generate(messages))
    assert model.calls == []


def test_callbacks_fire_with_message_texts():
    observer = _RecordingObserver()
    model = FakeChatModel(
        ["reply"],
        callback_manager=CallbackManager([observer]),
        settings=LLMSettings(),
    )

    run_async(model.run([ChatMessage(text="a"), ChatMessage(text="b")]))

    assert observer.events == [("start", ["a", "b"]), ("end", "reply")]


def test_errors_notify_once_and_propagate():
    observer = _RecordingObserver()
    model = FakeChatModel(
        error="overloaded",
        callback_manager=CallbackManager([observer]),
        settings=LLMSettings(),
    )

    with pytest.raises(ProviderInvocationError, match="overloaded"):
        run_async(model.run([ChatMessage(text="a")]))

    assert observer.events == [("start", ["a"]), ("error", "overloaded")]


def test_stop_sequences_truncate_fake_reply():
    model = FakeChatModel(["first line\nsecond"], settings=LLMSettings())
    assert run_async(model.run([ChatMessage(text="x")], stop=["\n"])).text == "first line"


def test_run_sync():
    model = FakeChatModel(settings=LLMSettings())
    assert model.run_sync([ChatMessage(text="echo")]).text == "echo"


def test_chat_openai_maps_messages_and_response():
    completions = _FakeChatCompletions(replies=["one", "two"])
    model = ChatOpenAI(
        client=_FakeChatClient(completions),
        retry_policy=FAST,
        settings=LLMSettings(),
        model_name="gpt-test",
        n=2,
    )

    result = run_async(
        model.generate(
            [ChatMessage(text="sys", role="system"), ChatMessage(text="hi")],
            stop=["END"],
        )
    )

    payload = completions.payloads[0]
    assert payload["model"] == "gpt-test"
    assert payload["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
    ]
    assert payload["stop"] == ["END"]
    assert "max_tokens" not in payload
    assert [g.message.text for g in result.generations] == ["one", "two"]
    assert result.generations[0].message.role == "assistant"
    assert result.llm_output["model"] == "gpt-test"


def test_chat_openai_retries_transient_failures():
    completions = _FakeChatCompletions(failures=1)
    model = ChatOpenAI(client=_FakeChatClient(completions), retry_policy=FAST, settings=LLMSettings())

    assert run_async(model.run([ChatMessage(text="hi")])).text == "hi there"
    assert len(completions.payloads) == 2


def test_chat_openai_without_choices_fails():
    completions = _FakeChatCompletions(replies=[])
    model = ChatOpenAI(client=_FakeChatClient(completions), retry_policy=FAST, settings=LLMSettings())

    with pytest.raises(ProviderInvocationError):
        run_async(model.run([ChatMessage(text="hi")]))


@pytest.mark.parametrize(
    "params",
    [{"n": 0}, {"max_tokens": 0}, {"temperature": -0.1}, {"top_p": 1.5}],
)
def test_chat_openai_rejects_out_of_range_params(params):
    with pytest.raises(LLMConfigurationError):
        ChatOpenAI(client=_FakeChatClient(_FakeChatCompletions()), settings=LLMSettings(), **params)
