"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error taxonomy for the LLM invocation layer.
"""

from __future__ import annotations


class LLMError(RuntimeError):
    """Base class for errors raised by linkchain itself."""


class InvalidArgumentError(LLMError, ValueError):
    """Raised when call input does not have the expected shape."""


class LLMConfigurationError(LLMError):
    """Raised for missing or conflicting configuration."""


class LLMCacheError(LLMConfigurationError):
    """Raised when cache backend resolution fails."""


class UnknownProviderTypeError(LLMError, KeyError):
    """Raised when a serialized `_type` discriminator is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep the plain text.
        return str(self.args[0]) if self.args else ""


class ProviderInvocationError(LLMError):
    """Raised by built-in providers when a backend response cannot be used."""
