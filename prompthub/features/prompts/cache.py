"""Redis cache for trending candidate ids.

Keys embed a generation counter. Bumping the counter orphans every cached
ranking, and orphans expire on their own TTL. Redis failures degrade to a
cache miss.
"""

from __future__ import annotations

import json
import logging

from prompthub.platform.config import settings
from prompthub.platform.redis import get_redis

logger = logging.getLogger(__name__)

_GENERATION_KEY = "trending:generation"


async def _generation() -> str:
    redis = get_redis()
    value = await redis.get(_GENERATION_KEY)
    return str(value or "0")


def _ranking_key(generation: str, *, timeframe: str, category: str | None, limit: int) -> str:
    return f"trending:{generation}:{timeframe}:{category or 'all'}:{limit}"


async def get_cached_ids(*, timeframe: str, category: str | None, limit: int) -> list[str] | None:
    try:
        redis = get_redis()
        key = _ranking_key(await _generation(), timeframe=timeframe, category=category, limit=limit)
        raw = await redis.get(key)
    except Exception as exc:
        logger.warning("Trending cache read failed: %s", exc)
        return None

    if not raw:
        return None
    try:
        ids = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(ids, list):
        return None
    return [str(i) for i in ids]


async def store_ids(ids: list[str], *, timeframe: str, category: str | None, limit: int) -> None:
    try:
        redis = get_redis()
        key = _ranking_key(await _generation(), timeframe=timeframe, category=category, limit=limit)
        await redis.set(key, json.dumps(ids), ex=settings.trending_cache_ttl_seconds)
    except Exception as exc:
        logger.warning("Trending cache write failed: %s", exc)


async def invalidate_trending() -> None:
    try:
        redis = get_redis()
        await redis.incr(_GENERATION_KEY)
    except Exception as exc:
        logger.warning("Trending cache invalidation failed: %s", exc)
