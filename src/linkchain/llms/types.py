"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

This module defines provider-agnostic result types for LLM and chat calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]

# `_type` discriminator plus provider-specific identifying params.
SerializedLLM: TypeAlias = dict[str, Any]

Role = Literal["user", "assistant", "system"]
ROLES: frozenset[str] = frozenset({"user", "assistant", "system"})


@dataclass(frozen=True, slots=True)
class Generation:
    """One produced text plus optional provider info (e.g. finish reason)."""
    text: str
    generation_info: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "generation_info": self.generation_info}

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "Generation":
        info = row.get("generation_info")
        return cls(
            text=str(row.get("text", "")),
            generation_info=info if isinstance(info, dict) else None,
        )


@dataclass(frozen=True, slots=True)
class LLMResult:
    """
    Result of one `generate` call.

    `generations[i]` holds every completion produced for prompt `i`.
    """

    generations: list[list[Generation]]
    llm_output: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Role-tagged chat message."""
    text: str
    role: Role = "user"


@dataclass(frozen=True, slots=True)
class ChatGeneration:
    """One produced chat message plus raw provider info."""
    message: ChatMessage
    generation_info: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ChatResult:
    """Result of one chat `generate` call."""
    generations: list[ChatGeneration]
    llm_output: dict[str, Any] = field(default_factory=dict)
