"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: embeddings/base.py.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Embeddings(ABC):
    """Text embedding contract consumed by vector-store integrations."""

    @abstractmethod
    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed many documents, one vector per input text, in order."""

    @abstractmethod
    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query string."""
