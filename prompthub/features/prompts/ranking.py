"""Trending order for prompts.

The engagement score weights a like twice as much as a comment. Ties go to
the more recent prompt, then to the prompt id, so the order is total and
the same input always ranks the same way.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol, TypeVar

LIKE_WEIGHT = 2
COMMENT_WEIGHT = 1


class Rankable(Protocol):
    id: str
    likes_count: int
    comments_count: int
    created_at: datetime


T = TypeVar("T", bound=Rankable)


def engagement_score(*, likes_count: int, comments_count: int) -> int:
    return LIKE_WEIGHT * int(likes_count or 0) + COMMENT_WEIGHT * int(comments_count or 0)


def _sort_key(prompt: Rankable) -> tuple[int, float, str]:
    score = engagement_score(likes_count=prompt.likes_count, comments_count=prompt.comments_count)
    return (-score, -prompt.created_at.timestamp(), str(prompt.id))


def rank_trending(prompts: Iterable[T]) -> list[T]:
    return sorted(prompts, key=_sort_key)
