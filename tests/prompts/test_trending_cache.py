from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from prompthub.features.prompts import cache
from prompthub.features.prompts import services as prompt_services


class _FakeRedis:
    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    async def get(self, key: str):
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        self.store[key] = value

    async def incr(self, key: str) -> int:
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value


class _BrokenRedis:
    async def get(self, key: str):
        raise ConnectionError("redis down")

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        raise ConnectionError("redis down")

    async def incr(self, key: str) -> int:
        raise ConnectionError("redis down")


def _prompt(pid: str, likes: int) -> SimpleNamespace:
    return SimpleNamespace(
        id=pid,
        likes_count=likes,
        comments_count=0,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


class _FakePromptRepo:
    def __init__(self, prompts: list[SimpleNamespace]) -> None:
        self.prompts = {p.id: p for p in prompts}
        self.candidate_calls = 0

    async def trending_candidates(self, *, since, category, limit):
        self.candidate_calls += 1
        return [(p, "user") for p in list(self.prompts.values())[:limit]]

    async def get_many(self, ids):
        return [(self.prompts[i], "user") for i in ids if i in self.prompts]


@pytest.mark.asyncio
async def test_store_then_read_round_trips_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    redis = _FakeRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: redis)

    await cache.store_ids(["a", "b"], timeframe="week", category=None, limit=10)

    assert await cache.get_cached_ids(timeframe="week", category=None, limit=10) == ["a", "b"]
    assert await cache.get_cached_ids(timeframe="day", category=None, limit=10) is None


@pytest.mark.asyncio
async def test_invalidation_orphans_cached_rankings(monkeypatch: pytest.MonkeyPatch) -> None:
    redis = _FakeRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: redis)

    await cache.store_ids(["a"], timeframe="all", category="coding", limit=5)
    await cache.invalidate_trending()

    assert await cache.get_cached_ids(timeframe="all", category="coding", limit=5) is None


@pytest.mark.asyncio
async def test_redis_failure_degrades_to_cache_miss(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cache, "get_redis", lambda: _BrokenRedis())

    assert await cache.get_cached_ids(timeframe="week", category=None, limit=10) is None
    await cache.store_ids(["a"], timeframe="week", category=None, limit=10)
    await cache.invalidate_trending()


@pytest.mark.asyncio
async def test_cached_hit_rereads_rows_and_reranks(monkeypatch: pytest.MonkeyPatch) -> None:
    redis = _FakeRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: redis)

    a = _prompt("a", likes=1)
    b = _prompt("b", likes=5)
    repo = _FakePromptRepo([a, b])

    first = await prompt_services.trending_prompts(repo, timeframe="week", category=None, limit=10)
    assert [p.id for p, _ in first] == ["b", "a"]
    assert repo.candidate_calls == 1

    # Counters move after caching; the cached id set is re-ranked on fresh rows.
    a.likes_count = 10
    second = await prompt_services.trending_prompts(repo, timeframe="week", category=None, limit=10)
    assert [p.id for p, _ in second] == ["a", "b"]
    assert repo.candidate_calls == 1
