from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.analytics.schemas import PlatformAnalyticsResponse
from prompthub.platform.db.models import Prompt, PromptView
from prompthub.platform.db.session import get_session

router = APIRouter(prefix="/analytics")

_WINDOW_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@router.get("", response_model=PlatformAnalyticsResponse)
async def platform_analytics(session: AsyncSession = Depends(get_session)) -> PlatformAnalyticsResponse:
    since = _utcnow() - timedelta(days=_WINDOW_DAYS)

    views_row = await session.execute(select(func.count()).select_from(PromptView))
    recent_row = await session.execute(
        select(func.count()).select_from(Prompt).where(Prompt.created_at >= since)
    )
    creators_row = await session.execute(
        select(func.count(distinct(Prompt.user_id))).where(Prompt.created_at >= since)
    )

    return PlatformAnalyticsResponse(
        total_views=int(views_row.scalar() or 0),
        recent_prompts=int(recent_row.scalar() or 0),
        active_creators=int(creators_row.scalar() or 0),
        window_days=_WINDOW_DAYS,
    )
