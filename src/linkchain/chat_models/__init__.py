"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: chat_models/__init__.py.
"""

from .base import BaseChatModel, SimpleChatModel
from .fake import FakeChatModel
from .openai import ChatOpenAI, ChatOpenAIParams

__all__ = [
    "BaseChatModel",
    "SimpleChatModel",
    "ChatOpenAI",
    "ChatOpenAIParams",
    "FakeChatModel",
]
