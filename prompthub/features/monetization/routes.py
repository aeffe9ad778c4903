from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.monetization.eligibility import EligibilityReport
from prompthub.features.monetization.repository import MonetizationRepository
from prompthub.features.monetization.schemas import (
    EligibilityResponse,
    MonetizationOverviewResponse,
    MonetizationStatusItem,
)
from prompthub.features.monetization.services import get_eligibility, request_monetization
from prompthub.platform.db.models import UserMonetization
from prompthub.platform.db.session import get_session
from prompthub.platform.security import get_current_user

router = APIRouter(prefix="/monetization")


def get_monetization_repository(session: AsyncSession = Depends(get_session)) -> MonetizationRepository:
    return MonetizationRepository(session)


def _status_item(row: UserMonetization) -> MonetizationStatusItem:
    return MonetizationStatusItem(
        id=row.id,
        user_id=row.user_id,
        is_monetized=row.is_monetized,
        status=row.status,
        requested_at=row.requested_at,
        approved_at=row.approved_at,
        rejected_at=row.rejected_at,
    )


def _eligibility_response(report: EligibilityReport) -> EligibilityResponse:
    return EligibilityResponse(
        meets_requirements=report.meets_requirements,
        recent_prompts_count=report.recent_prompts_count,
        total_views=report.total_views,
        required_prompts=report.required_prompts,
        required_views=report.required_views,
    )


@router.get("/status", response_model=MonetizationOverviewResponse)
async def monetization_status(
    user=Depends(get_current_user),
    repo: MonetizationRepository = Depends(get_monetization_repository),
) -> MonetizationOverviewResponse:
    row = await repo.get_status(user.id)
    report = await get_eligibility(repo, user.id)
    return MonetizationOverviewResponse(
        status=_status_item(row) if row is not None else None,
        is_monetized=bool(row.is_monetized) if row is not None else False,
        eligibility=_eligibility_response(report),
    )


@router.post("/request", response_model=MonetizationStatusItem, status_code=status.HTTP_201_CREATED)
async def create_request(
    user=Depends(get_current_user),
    repo: MonetizationRepository = Depends(get_monetization_repository),
) -> MonetizationStatusItem:
    row = await request_monetization(repo, user.id)
    return _status_item(row)
