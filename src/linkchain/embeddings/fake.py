"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: embeddings/fake.py.
"""

from __future__ import annotations

import hashlib

from .base import Embeddings


class FakeEmbeddings(Embeddings):
    """Deterministic hash-derived vectors; equal texts map to equal vectors."""

    def __init__(self, size: int = 8) -> None:
        if size < 1:
            raise ValueError("size must be >= 1")
        self.size = size

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255.0 for i in range(self.size)]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(text) for text in texts]

    async def embed_query(self, text: str) -> list[float]:
        return self._vector(text)
