from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.prompts.repository import adjust_counter
from prompthub.platform.db.models import Prompt, PromptView
from prompthub.platform.errors import NotFoundError

logger = logging.getLogger(__name__)


async def track_view(session: AsyncSession, *, prompt_id: str, user_id: str | None) -> int:
    result = await session.execute(select(Prompt.id).where(Prompt.id == prompt_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Prompt not found")

    session.add(PromptView(prompt_id=prompt_id, user_id=user_id))
    await adjust_counter(session, prompt_id, "views_count", 1)
    await session.commit()

    count = await session.execute(select(Prompt.views_count).where(Prompt.id == prompt_id))
    views_count = int(count.scalar() or 0)
    logger.debug("View tracked: prompt=%s user=%s views=%d", prompt_id, user_id or "anonymous", views_count)
    return views_count
