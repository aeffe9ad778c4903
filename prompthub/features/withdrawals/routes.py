from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.withdrawals.accounting import MINIMUM_WITHDRAWAL, PROCESSING_NOTICE
from prompthub.features.withdrawals.repository import WithdrawalRepository
from prompthub.features.withdrawals.schemas import (
    BalanceResponse,
    RevenueItem,
    WithdrawalCreateRequest,
    WithdrawalResponse,
)
from prompthub.features.withdrawals.services import create_withdrawal_request, get_balance
from prompthub.platform.db.models import WithdrawalRequest
from prompthub.platform.db.session import get_session
from prompthub.platform.security import get_current_user

router = APIRouter(prefix="/withdrawals")


def get_withdrawal_repository(session: AsyncSession = Depends(get_session)) -> WithdrawalRepository:
    return WithdrawalRepository(session)


def _withdrawal_response(row: WithdrawalRequest) -> WithdrawalResponse:
    return WithdrawalResponse(
        id=row.id,
        user_id=row.user_id,
        amount=row.amount,
        status=row.status,
        payment_method=row.payment_method,
        payment_details=row.payment_details,
        notes=row.notes,
        requested_at=row.requested_at,
        processed_at=row.processed_at,
    )


@router.get("", response_model=list[WithdrawalResponse])
async def list_withdrawals(
    user=Depends(get_current_user),
    repo: WithdrawalRepository = Depends(get_withdrawal_repository),
) -> list[WithdrawalResponse]:
    rows = await repo.list_withdrawals(user.id)
    return [_withdrawal_response(row) for row in rows]


@router.get("/balance", response_model=BalanceResponse)
async def balance(
    user=Depends(get_current_user),
    repo: WithdrawalRepository = Depends(get_withdrawal_repository),
) -> BalanceResponse:
    summary = await get_balance(repo, user.id)
    return BalanceResponse(
        total_earnings=summary.total_earnings,
        withdrawn_or_pending=summary.withdrawn_or_pending,
        available_balance=summary.available_balance,
        minimum_withdrawal=MINIMUM_WITHDRAWAL,
        processing_notice=PROCESSING_NOTICE,
    )


@router.get("/revenue", response_model=list[RevenueItem])
async def revenue(
    user=Depends(get_current_user),
    repo: WithdrawalRepository = Depends(get_withdrawal_repository),
) -> list[RevenueItem]:
    rows = await repo.list_revenue(user.id)
    return [
        RevenueItem(
            id=row.id,
            prompt_id=row.prompt_id,
            revenue_amount=row.revenue_amount,
            platform_share=row.platform_share,
            user_share=row.user_share,
            ad_impressions=row.ad_impressions,
            revenue_date=row.revenue_date,
        )
        for row in rows
    ]


@router.post("", response_model=WithdrawalResponse, status_code=status.HTTP_201_CREATED)
async def request_withdrawal(
    body: WithdrawalCreateRequest,
    user=Depends(get_current_user),
    repo: WithdrawalRepository = Depends(get_withdrawal_repository),
) -> WithdrawalResponse:
    row = await create_withdrawal_request(
        repo,
        user_id=user.id,
        amount=body.amount,
        payment_method=body.payment_method,
        payment_details=body.payment_details,
    )
    return _withdrawal_response(row)
