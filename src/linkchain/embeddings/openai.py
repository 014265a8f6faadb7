"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

OpenAI embeddings with batched document requests.
"""

from __future__ import annotations

from typing import Any

from ..llms.errors import ProviderInvocationError
from ..llms.providers.openai import build_openai_client
from ..llms.retry import RetryPolicy, call_with_retry, is_transient_error
from ..llms.settings import LLMSettings
from ..utils import chunk_list
from .base import Embeddings


class OpenAIEmbeddings(Embeddings):
    """
    Embeddings from the OpenAI embeddings endpoint.

    Documents are sent `batch_size` at a time; every request is retried
    up to `max_retries` attempts with the settings' backoff bounds.
    """

    def __init__(
        self,
        *,
        model_name: str = "text-embedding-ada-002",
        batch_size: int = 20,
        max_retries: int | None = None,
        client: Any = None,
        settings: LLMSettings | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.settings = settings or LLMSettings.from_env()
        self.model_name = model_name
        self.batch_size = batch_size
        self.retry_policy = RetryPolicy(
            max_attempts=max_retries if max_retries is not None else self.settings.max_retries,
            min_delay_s=self.settings.min_delay_s,
            max_delay_s=self.settings.max_delay_s,
        )
        self._client = client if client is not None else build_openai_client(self.settings)

    async def _embedding_with_retry(self, inputs: list[str]) -> list[list[float]]:
        response = await call_with_retry(
            lambda: self._client.embeddings.create(model=self.model_name, input=inputs),
            policy=self.retry_policy,
            should_retry=is_transient_error,
        )
        rows = sorted(response.data, key=lambda row: getattr(row, "index", 0))
        if len(rows) != len(inputs):
            raise ProviderInvocationError(
                f"Expected {len(inputs)} embeddings, got {len(rows)}"
            )
        return [list(row.embedding) for row in rows]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        embeddings: list[list[float]] = []
        for batch in chunk_list(texts, self.batch_size):
            embeddings.extend(await self._embedding_with_retry(batch))
        return embeddings

    async def embed_query(self, text: str) -> list[float]:
        return (await self._embedding_with_retry([text]))[0]
