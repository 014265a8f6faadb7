"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: providers/__init__.py.
"""

from .fake import FakeLLM
from .openai import OpenAI, OpenAIParams, build_openai_client

__all__ = [
    "FakeLLM",
    "OpenAI",
    "OpenAIParams",
    "build_openai_client",
]
