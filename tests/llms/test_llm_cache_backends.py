from __future__ import annotations

import asyncio
import os
import uuid

import pytest

from linkchain.llms import (
    FakeLLM,
    Generation,
    InMemoryLLMCache,
    LLMCacheError,
    LLMConfigurationError,
    LLMSettings,
    RedisLLMCache,
    create_llm_cache,
    get_cache_key,
    list_llm_cache_backends,
)


def run_async(coro):
    return asyncio.run(coro)


class _FakeRedis:
    def __init__(self) -> None:
        self.rows: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.rows.get(key)

    async def set(self, key, value):
        self.rows[key] = value.encode("utf-8")

    async def setex(self, key, ttl, value):
        self.rows[key] = value.encode("utf-8")
        self.ttls[key] = ttl


def test_cache_key_is_deterministic_and_order_sensitive():
    assert get_cache_key("a", "b") == get_cache_key("a", "b")
    assert get_cache_key("a", "b") != get_cache_key("b", "a")
    assert get_cache_key("a", "b") != get_cache_key("ab")


def test_inmemory_lookup_and_update():
    cache = InMemoryLLMCache()

    async def scenario():
        assert await cache.lookup("missing") is None
        await cache.update("k", [Generation(text="v")])
        return await cache.lookup("k")

    assert run_async(scenario()) == [Generation(text="v")]
    assert len(cache) == 1
    cache.clear()
    assert len(cache) == 0


def test_inmemory_lookup_returns_a_copy():
    cache = InMemoryLLMCache()

    async def scenario():
        await cache.update("k", [Generation(text="v")])
        hit = await cache.lookup("k")
        hit.append(Generation(text="extra"))
        return await cache.lookup("k")

    assert run_async(scenario()) == [Generation(text="v")]


def test_redis_cache_round_trips_generations():
    client = _FakeRedis()
    cache = RedisLLMCache(client)
    rows = [
        Generation(text="one", generation_info={"finish_reason": "stop"}),
        Generation(text="two"),
    ]

    async def scenario():
        await cache.update("abc", rows)
        return await cache.lookup("abc")

    assert run_async(scenario()) == rows
    assert list(client.rows) == ["linkchain:llm-cache:abc"]
    assert client.ttls == {}


def test_redis_cache_uses_setex_when_ttl_set():
    client = _FakeRedis()
    cache = RedisLLMCache(client, prefix="t", ttl_s=2.5)

    run_async(cache.update("k", [Generation(text="v")]))

    assert client.ttls == {"t:k": 2}


def test_redis_cache_treats_corrupted_entries_as_misses():
    client = _FakeRedis()
    client.rows["linkchain:llm-cache:bad"] = b"{not json"
    client.rows["linkchain:llm-cache:odd"] = b'{"text": "not a list"}'
    cache = RedisLLMCache(client)

    assert run_async(cache.lookup("bad")) is None
    assert run_async(cache.lookup("odd")) is None
    assert run_async(cache.lookup("absent")) is None


@pytest.mark.parametrize("blob", [b"[]", b"[1]", b"[{\"text\": \"ok\"}, \"junk\"]"])
def test_redis_cache_treats_rowless_entries_as_misses(blob):
    client = _FakeRedis()
    cache = RedisLLMCache(client)
    llm = FakeLLM(cache_backend=cache, settings=LLMSettings())
    key = get_cache_key("p", llm._llm_string(None))
    client.rows[f"linkchain:llm-cache:{key}"] = blob

    assert run_async(cache.lookup(key)) is None
    assert run_async(llm.call("p")) == "p"
    assert llm.prompts_seen == ["p"]


def test_redis_cache_rejects_non_positive_ttl():
    with pytest.raises(LLMConfigurationError):
        RedisLLMCache(_FakeRedis(), ttl_s=0)


def test_llm_serves_hits_from_redis_backend():
    cache = RedisLLMCache(_FakeRedis())
    llm = FakeLLM(cache_backend=cache, settings=LLMSettings())

    run_async(llm.generate(["p"]))
    result = run_async(llm.generate(["p"]))

    assert result.generations[0][0].text == "p"
    assert llm.prompts_seen == ["p"]


def test_create_llm_cache_resolution():
    first = create_llm_cache()
    second = create_llm_cache("InMemory")
    assert isinstance(first, InMemoryLLMCache)
    assert isinstance(second, InMemoryLLMCache)
    assert first is not second

    explicit = InMemoryLLMCache()
    assert create_llm_cache(explicit) is explicit

    with pytest.raises(LLMCacheError):
        create_llm_cache("memcached")


def test_create_llm_cache_builds_redis_backend():
    pytest.importorskip("redis", reason="redis not installed")
    cache = create_llm_cache("redis", settings=LLMSettings(redis_url="redis://localhost:6379/0"))
    assert isinstance(cache, RedisLLMCache)


def test_list_llm_cache_backends():
    assert list_llm_cache_backends() == ["inmemory", "redis"]


def test_redis_cache_integration():
    pytest.importorskip("redis", reason="redis not installed")
    url = os.getenv("LINKCHAIN_REDIS_URL")
    if url is None:
        pytest.skip("No LINKCHAIN_REDIS_URL configured for integration test")

    cache = RedisLLMCache.from_url(url, prefix=f"linkchain-test-{uuid.uuid4().hex}", ttl_s=30)

    async def scenario():
        await cache.update("k", [Generation(text="stored")])
        return await cache.lookup("k")

    assert run_async(scenario()) == [Generation(text="stored")]
