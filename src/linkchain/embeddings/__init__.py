"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: embeddings/__init__.py.
"""

from .base import Embeddings
from .fake import FakeEmbeddings
from .openai import OpenAIEmbeddings

__all__ = ["Embeddings", "FakeEmbeddings", "OpenAIEmbeddings"]
