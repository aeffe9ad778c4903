from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.prompts import cache
from prompthub.features.prompts.repository import adjust_counter
from prompthub.platform.db.models import Like, Prompt
from prompthub.platform.errors import NotFoundError


async def _likes_count(session: AsyncSession, prompt_id: str) -> int:
    result = await session.execute(select(Prompt.likes_count).where(Prompt.id == prompt_id))
    count = result.scalar_one_or_none()
    if count is None:
        raise NotFoundError("Prompt not found")
    return int(count)


async def toggle_like(session: AsyncSession, *, user_id: str, prompt_id: str) -> tuple[bool, int]:
    await _likes_count(session, prompt_id)

    existing = await session.execute(select(Like.id).where(Like.prompt_id == prompt_id, Like.user_id == user_id))
    if existing.scalar_one_or_none() is not None:
        removed = await session.execute(delete(Like).where(Like.prompt_id == prompt_id, Like.user_id == user_id))
        # A concurrent unlike may already have removed the row.
        if removed.rowcount:
            await adjust_counter(session, prompt_id, "likes_count", -removed.rowcount)
        is_liked = False
    else:
        session.add(Like(prompt_id=prompt_id, user_id=user_id))
        await session.flush()
        await adjust_counter(session, prompt_id, "likes_count", 1)
        is_liked = True

    await session.commit()
    await cache.invalidate_trending()
    return is_liked, await _likes_count(session, prompt_id)


async def liked_prompt_ids(session: AsyncSession, user_id: str) -> list[str]:
    result = await session.execute(
        select(Like.prompt_id).where(Like.user_id == user_id).order_by(Like.created_at.desc())
    )
    return [str(prompt_id) for prompt_id in result.scalars().all()]
