from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import AdRevenue, User, WithdrawalRequest


class WithdrawalRepository:
    """Reads and writes one user's revenue ledger and withdrawal requests.

    Every call goes to the store, so balances are always recomputed from
    current rows.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lock_user(self, user_id: str) -> None:
        await self._session.execute(select(User.id).where(User.id == user_id).with_for_update())

    async def list_revenue(self, user_id: str) -> list[AdRevenue]:
        result = await self._session.execute(
            select(AdRevenue).where(AdRevenue.user_id == user_id).order_by(AdRevenue.revenue_date.desc())
        )
        return list(result.scalars().all())

    async def list_withdrawals(self, user_id: str) -> list[WithdrawalRequest]:
        result = await self._session.execute(
            select(WithdrawalRequest)
            .where(WithdrawalRequest.user_id == user_id)
            .order_by(WithdrawalRequest.requested_at.desc())
        )
        return list(result.scalars().all())

    async def add_withdrawal(
        self,
        *,
        user_id: str,
        amount: Decimal,
        payment_method: str,
        payment_details: dict,
    ) -> WithdrawalRequest:
        row = WithdrawalRequest(
            user_id=user_id,
            amount=amount,
            status="pending",
            payment_method=payment_method,
            payment_details=payment_details,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def commit(self, row: WithdrawalRequest | None = None) -> None:
        await self._session.commit()
        if row is not None:
            await self._session.refresh(row)
