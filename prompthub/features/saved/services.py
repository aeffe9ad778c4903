from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import Prompt, SavedPrompt
from prompthub.platform.errors import NotFoundError


async def toggle_save(session: AsyncSession, *, user_id: str, prompt_id: str) -> bool:
    prompt = await session.execute(select(Prompt.id).where(Prompt.id == prompt_id))
    if prompt.scalar_one_or_none() is None:
        raise NotFoundError("Prompt not found")

    existing = await session.execute(
        select(SavedPrompt.id).where(SavedPrompt.prompt_id == prompt_id, SavedPrompt.user_id == user_id)
    )
    if existing.scalar_one_or_none() is not None:
        await session.execute(
            delete(SavedPrompt).where(SavedPrompt.prompt_id == prompt_id, SavedPrompt.user_id == user_id)
        )
        is_saved = False
    else:
        session.add(SavedPrompt(prompt_id=prompt_id, user_id=user_id))
        is_saved = True

    await session.commit()
    return is_saved


async def saved_prompt_ids(session: AsyncSession, user_id: str) -> list[str]:
    result = await session.execute(
        select(SavedPrompt.prompt_id).where(SavedPrompt.user_id == user_id).order_by(SavedPrompt.created_at.desc())
    )
    return [str(prompt_id) for prompt_id in result.scalars().all()]
