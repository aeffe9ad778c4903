from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import Prompt, UserMonetization


class MonetizationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_status(self, user_id: str) -> UserMonetization | None:
        result = await self._session.execute(select(UserMonetization).where(UserMonetization.user_id == user_id))
        return result.scalar_one_or_none()

    async def count_prompts_since(self, user_id: str, since: datetime) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(Prompt)
            .where(Prompt.user_id == user_id, Prompt.created_at >= since)
        )
        return int(result.scalar() or 0)

    async def sum_views_since(self, user_id: str, since: datetime) -> int:
        result = await self._session.execute(
            select(func.coalesce(func.sum(Prompt.views_count), 0))
            .where(Prompt.user_id == user_id, Prompt.created_at >= since)
        )
        return int(result.scalar() or 0)

    async def create_request(self, user_id: str) -> UserMonetization:
        row = UserMonetization(user_id=user_id, status="pending", is_monetized=False)
        self._session.add(row)
        await self._session.flush()
        return row

    async def reopen_request(self, row: UserMonetization, now: datetime) -> UserMonetization:
        row.status = "pending"
        row.is_monetized = False
        row.requested_at = now
        row.approved_at = None
        row.rejected_at = None
        await self._session.flush()
        return row

    async def commit(self, row: UserMonetization | None = None) -> None:
        await self._session.commit()
        if row is not None:
            await self._session.refresh(row)
