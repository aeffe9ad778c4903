from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.prompts.ranking import COMMENT_WEIGHT, LIKE_WEIGHT
from prompthub.platform.db.models import Profile, Prompt, PromptStep

_COUNTERS = {
    "likes_count": Prompt.likes_count,
    "comments_count": Prompt.comments_count,
    "views_count": Prompt.views_count,
}


def _engagement_expr():
    return Prompt.likes_count * LIKE_WEIGHT + Prompt.comments_count * COMMENT_WEIGHT


def _with_username():
    return select(Prompt, Profile.username).outerjoin(Profile, Profile.user_id == Prompt.user_id)


class PromptRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_prompts(
        self,
        *,
        category: str | None = None,
        search: str | None = None,
        user_id: str | None = None,
        trending: bool = False,
        limit: int = 100,
    ) -> list[tuple[Prompt, str | None]]:
        query = _with_username()
        if category and category != "all":
            query = query.where(Prompt.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Prompt.title.ilike(pattern), Prompt.description.ilike(pattern)))
        if user_id:
            query = query.where(Prompt.user_id == user_id)

        if trending:
            query = query.order_by(desc(_engagement_expr()), Prompt.created_at.desc(), Prompt.id)
        else:
            query = query.order_by(Prompt.created_at.desc())

        result = await self._session.execute(query.limit(limit))
        return [(prompt, username) for prompt, username in result.all()]

    async def trending_candidates(
        self,
        *,
        since: datetime | None,
        category: str | None,
        limit: int,
    ) -> list[tuple[Prompt, str | None]]:
        query = _with_username()
        if since is not None:
            query = query.where(Prompt.created_at >= since)
        if category and category != "all":
            query = query.where(Prompt.category == category)
        query = query.order_by(desc(_engagement_expr()), Prompt.created_at.desc(), Prompt.id).limit(limit)

        result = await self._session.execute(query)
        return [(prompt, username) for prompt, username in result.all()]

    async def get_many(self, prompt_ids: Sequence[str]) -> list[tuple[Prompt, str | None]]:
        if not prompt_ids:
            return []
        result = await self._session.execute(_with_username().where(Prompt.id.in_(list(prompt_ids))))
        return [(prompt, username) for prompt, username in result.all()]

    async def get_with_username(self, prompt_id: str) -> tuple[Prompt, str | None] | None:
        result = await self._session.execute(_with_username().where(Prompt.id == prompt_id))
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def get(self, prompt_id: str) -> Prompt | None:
        result = await self._session.execute(select(Prompt).where(Prompt.id == prompt_id))
        return result.scalar_one_or_none()

    async def list_steps(self, prompt_ids: Sequence[str]) -> dict[str, list[PromptStep]]:
        steps: dict[str, list[PromptStep]] = {pid: [] for pid in prompt_ids}
        if not prompt_ids:
            return steps

        result = await self._session.execute(
            select(PromptStep)
            .where(PromptStep.prompt_id.in_(list(prompt_ids)))
            .order_by(PromptStep.prompt_id, PromptStep.step_number)
        )
        for step in result.scalars().all():
            steps.setdefault(step.prompt_id, []).append(step)
        return steps

    async def add(self, prompt: Prompt) -> Prompt:
        self._session.add(prompt)
        await self._session.flush()
        return prompt

    async def add_steps(self, prompt_id: str, steps: Sequence[tuple[int, str]]) -> list[PromptStep]:
        rows = [PromptStep(prompt_id=prompt_id, step_number=number, step_text=text) for number, text in steps]
        self._session.add_all(rows)
        await self._session.flush()
        return rows

    async def delete(self, prompt_id: str, owner_id: str) -> bool:
        result = await self._session.execute(
            delete(Prompt).where(Prompt.id == prompt_id, Prompt.user_id == owner_id)
        )
        return bool(result.rowcount)

    async def commit(self, *rows) -> None:
        await self._session.commit()
        for row in rows:
            await self._session.refresh(row)


async def adjust_counter(session: AsyncSession, prompt_id: str, counter: str, delta: int) -> None:
    """Atomically move one engagement counter, never below zero."""
    column = _COUNTERS[counter]
    await session.execute(
        update(Prompt)
        .where(Prompt.id == prompt_id)
        .values({counter: func.greatest(column + delta, 0)})
        .execution_options(synchronize_session=False)
    )
