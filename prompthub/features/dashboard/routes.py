from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from fastapi import APIRouter, Depends
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.dashboard.schemas import DashboardResponse, DashboardTopPrompt
from prompthub.platform.db.models import Prompt, PromptPurchase
from prompthub.platform.db.session import get_session
from prompthub.platform.security import get_current_user

router = APIRouter(prefix="/dashboard")


# 30% platform commission plus 10% payment gateway fee.
_CREATOR_SHARE_BPS = 6000
_BPS_DENOMINATOR = 10_000
_TOP_PROMPTS = 5


def creator_share(amount_gross: Decimal) -> Decimal:
    share = Decimal(amount_gross) * _CREATOR_SHARE_BPS / _BPS_DENOMINATOR
    return share.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@router.get("", response_model=DashboardResponse)
async def creator_dashboard(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> DashboardResponse:
    totals_row = await session.execute(
        select(
            func.count(Prompt.id),
            func.coalesce(func.sum(Prompt.views_count), 0),
            func.coalesce(func.sum(Prompt.likes_count), 0),
            func.coalesce(func.sum(Prompt.comments_count), 0),
            func.count(Prompt.id).filter(Prompt.is_paid.is_(True)),
        ).where(Prompt.user_id == user.id)
    )
    total_prompts, total_views, total_likes, total_comments, paid_prompts = totals_row.one()

    gross_row = await session.execute(
        select(func.coalesce(func.sum(PromptPurchase.purchase_price), 0))
        .select_from(PromptPurchase)
        .join(Prompt, Prompt.id == PromptPurchase.prompt_id)
        .where(Prompt.user_id == user.id)
    )
    gross = Decimal(gross_row.scalar() or 0)

    top_rows = await session.execute(
        select(Prompt)
        .where(Prompt.user_id == user.id)
        .order_by(desc(Prompt.views_count), desc(Prompt.created_at))
        .limit(_TOP_PROMPTS)
    )
    top_prompts = [
        DashboardTopPrompt(
            id=prompt.id,
            title=prompt.title,
            views_count=int(prompt.views_count or 0),
            likes_count=int(prompt.likes_count or 0),
            comments_count=int(prompt.comments_count or 0),
        )
        for prompt in top_rows.scalars().all()
    ]

    return DashboardResponse(
        total_prompts=int(total_prompts or 0),
        total_views=int(total_views or 0),
        total_likes=int(total_likes or 0),
        total_comments=int(total_comments or 0),
        paid_prompts=int(paid_prompts or 0),
        gross_earnings=gross,
        net_earnings=creator_share(gross),
        top_prompts=top_prompts,
    )
