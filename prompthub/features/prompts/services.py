from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from prompthub.features.prompts import cache
from prompthub.features.prompts.ranking import rank_trending
from prompthub.features.prompts.repository import PromptRepository
from prompthub.features.prompts.schemas import PromptCreateRequest, PromptStepCreate
from prompthub.platform.db.models import Prompt, PromptStep
from prompthub.platform.errors import ForbiddenError, MissingFieldError, NotFoundError

logger = logging.getLogger(__name__)

TIMEFRAME_WINDOWS: dict[str, timedelta | None] = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
    "all": None,
}

PromptWithUsername = tuple[Prompt, str | None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _rank_rows(rows: list[PromptWithUsername]) -> list[PromptWithUsername]:
    usernames = {prompt.id: username for prompt, username in rows}
    return [(prompt, usernames[prompt.id]) for prompt in rank_trending(prompt for prompt, _ in rows)]


async def list_prompts(
    repo: PromptRepository,
    *,
    category: str | None,
    search: str | None,
    user_id: str | None,
    trending: bool,
    limit: int,
) -> list[PromptWithUsername]:
    rows = await repo.list_prompts(
        category=category,
        search=search,
        user_id=user_id,
        trending=trending,
        limit=limit,
    )
    return _rank_rows(rows) if trending else rows


async def trending_prompts(
    repo: PromptRepository,
    *,
    timeframe: str,
    category: str | None,
    limit: int,
) -> list[PromptWithUsername]:
    cached_ids = await cache.get_cached_ids(timeframe=timeframe, category=category, limit=limit)
    if cached_ids is not None:
        rows = await repo.get_many(cached_ids)
        return _rank_rows(rows)

    window = TIMEFRAME_WINDOWS[timeframe]
    since = _utcnow() - window if window is not None else None
    rows = _rank_rows(await repo.trending_candidates(since=since, category=category, limit=limit))

    await cache.store_ids([prompt.id for prompt, _ in rows], timeframe=timeframe, category=category, limit=limit)
    return rows


async def get_prompt(repo: PromptRepository, prompt_id: str) -> PromptWithUsername:
    row = await repo.get_with_username(prompt_id)
    if row is None:
        raise NotFoundError("Prompt not found")
    return row


async def create_prompt(repo: PromptRepository, *, user_id: str, body: PromptCreateRequest) -> Prompt:
    if body.is_paid and (body.price is None or body.price <= 0):
        raise MissingFieldError(["price"], message="Paid prompts need a price above zero")

    prompt = Prompt(
        user_id=user_id,
        title=body.title,
        description=body.description,
        prompt_text=body.prompt_text,
        category=body.category,
        output_url=body.output_url,
        is_paid=body.is_paid,
        price=body.price if body.is_paid else None,
    )
    await repo.add(prompt)
    await repo.commit(prompt)
    await cache.invalidate_trending()

    logger.info("Prompt created: id=%s user=%s category=%s paid=%s", prompt.id, user_id, prompt.category, prompt.is_paid)
    return prompt


async def add_prompt_steps(
    repo: PromptRepository,
    *,
    user_id: str,
    prompt_id: str,
    steps: list[PromptStepCreate],
) -> list[PromptStep]:
    prompt = await repo.get(prompt_id)
    if prompt is None:
        raise NotFoundError("Prompt not found")
    if prompt.user_id != user_id:
        raise ForbiddenError()

    rows = await repo.add_steps(prompt_id, [(step.step_number, step.step_text) for step in steps])
    await repo.commit(*rows)
    return rows


async def delete_prompt(repo: PromptRepository, *, user_id: str, prompt_id: str) -> None:
    prompt = await repo.get(prompt_id)
    if prompt is None:
        raise NotFoundError("Prompt not found")
    if prompt.user_id != user_id:
        raise ForbiddenError()

    await repo.delete(prompt_id, user_id)
    await repo.commit()
    await cache.invalidate_trending()
    logger.info("Prompt deleted: id=%s user=%s", prompt_id, user_id)
