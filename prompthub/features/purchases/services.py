from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import Prompt, PromptPurchase
from prompthub.platform.errors import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


async def list_purchases(session: AsyncSession, user_id: str) -> list[PromptPurchase]:
    result = await session.execute(
        select(PromptPurchase)
        .where(PromptPurchase.user_id == user_id)
        .order_by(PromptPurchase.purchased_at.desc())
    )
    return list(result.scalars().all())


async def has_purchased(session: AsyncSession, *, user_id: str, prompt_id: str) -> bool:
    result = await session.execute(
        select(PromptPurchase.id).where(PromptPurchase.user_id == user_id, PromptPurchase.prompt_id == prompt_id)
    )
    return result.scalar_one_or_none() is not None


async def purchase_prompt(session: AsyncSession, *, user_id: str, prompt_id: str) -> PromptPurchase:
    result = await session.execute(select(Prompt).where(Prompt.id == prompt_id))
    prompt = result.scalar_one_or_none()
    if prompt is None:
        raise NotFoundError("Prompt not found")
    if not prompt.is_paid or prompt.price is None:
        raise ConflictError("This prompt is free")
    if prompt.user_id == user_id:
        raise ForbiddenError("You cannot purchase your own prompt")
    if await has_purchased(session, user_id=user_id, prompt_id=prompt_id):
        raise ConflictError("You already own this prompt")

    # No payment processor is wired in; recording the purchase grants access.
    purchase = PromptPurchase(user_id=user_id, prompt_id=prompt_id, purchase_price=prompt.price)
    session.add(purchase)
    await session.commit()
    await session.refresh(purchase)

    logger.info("Prompt purchased: prompt=%s buyer=%s price=%s", prompt_id, user_id, purchase.purchase_price)
    return purchase
