"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Thread-safe registry mapping serialized `_type` tags to LLM factories.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Any

from .errors import LLMConfigurationError, UnknownProviderTypeError

if TYPE_CHECKING:
    from .base import BaseLLM

LLMFactory = Callable[..., "BaseLLM"]

_REGISTRY: dict[str, LLMFactory] = {}
_LOCK = Lock()


def register_llm_type(
    type_tag: str,
    factory: LLMFactory,
    *,
    overwrite: bool = False,
) -> None:
    """
    Register one factory under its `_type` tag.

    The factory receives the serialized params (without `_type`) as keyword
    arguments, plus any runtime collaborators passed to `deserialize_llm`.
    """
    key = type_tag.strip().lower()
    if not key:
        raise LLMConfigurationError("LLM type tag must be non-empty")

    with _LOCK:
        if key in _REGISTRY and not overwrite:
            raise LLMConfigurationError(f"LLM type already registered: {key}")
        _REGISTRY[key] = factory


def get_llm_factory(type_tag: str) -> LLMFactory:
    """Resolve one registered factory by `_type` tag."""
    key = type_tag.strip().lower()
    with _LOCK:
        factory = _REGISTRY.get(key)
    if factory is None:
        raise UnknownProviderTypeError(f"Cannot load LLM with type '{type_tag}'")
    return factory


def list_llm_types() -> list[str]:
    """List registered type tags in deterministic order."""
    with _LOCK:
        return sorted(_REGISTRY.keys())


def deserialize_llm(data: Mapping[str, Any], **kwargs: Any) -> "BaseLLM":
    """Build an LLM from a `{"_type": ..., **params}` mapping."""
    params = dict(data)
    type_tag = params.pop("_type", None)
    if not isinstance(type_tag, str):
        raise UnknownProviderTypeError("Serialized LLM is missing a '_type' tag")
    factory = get_llm_factory(type_tag)
    return factory(**params, **kwargs)


def save_llm(llm: "BaseLLM", path: str | Path) -> None:
    """Write `llm.serialize()` to a JSON file."""
    Path(path).write_text(
        json.dumps(llm.serialize(), indent=2, sort_keys=True, default=str),
        encoding="utf-8",
    )


def load_llm(path: str | Path, **kwargs: Any) -> "BaseLLM":
    """Load an LLM saved with `save_llm`."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise LLMConfigurationError(f"LLM file {path} does not contain an object")
    return deserialize_llm(data, **kwargs)
