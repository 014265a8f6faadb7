"""
cached_llm.py: Minimal linkchain example.

Runs the same prompt twice against one OpenAI model sharing an in-memory
cache; the second call never reaches the API.

Usage:
    export LINKCHAIN_OPENAI_API_KEY=sk-...
    python examples/cached_llm.py
"""

import logging

from linkchain.llms import InMemoryLLMCache, OpenAI


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    cache = InMemoryLLMCache()
    llm = OpenAI(temperature=0, cache_backend=cache, verbose=True)

    first = await llm.call("Say hello world.")
    second = await llm.call("Say hello world.")
    print(first)
    print("served from cache:", first == second, "entries:", len(cache))


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
