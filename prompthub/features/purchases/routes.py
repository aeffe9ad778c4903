from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.purchases.schemas import PurchaseResponse, PurchaseStatusResponse
from prompthub.features.purchases.services import has_purchased, list_purchases, purchase_prompt
from prompthub.platform.db.models import PromptPurchase
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_current_user

router = APIRouter()


def _purchase_response(row: PromptPurchase) -> PurchaseResponse:
    return PurchaseResponse(
        id=row.id,
        user_id=row.user_id,
        prompt_id=row.prompt_id,
        purchase_price=row.purchase_price,
        purchased_at=row.purchased_at,
    )


@router.get("/purchases/me", response_model=list[PurchaseResponse])
async def my_purchases(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[PurchaseResponse]:
    rows = await list_purchases(session, user.id)
    return [_purchase_response(row) for row in rows]


@router.get("/prompts/{prompt_id}/purchase", response_model=PurchaseStatusResponse)
async def purchase_status(
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PurchaseStatusResponse:
    purchased = await has_purchased(session, user_id=user.id, prompt_id=prompt_id)
    return PurchaseStatusResponse(prompt_id=prompt_id, purchased=purchased)


@router.post("/prompts/{prompt_id}/purchase", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def purchase(
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PurchaseResponse:
    row = await purchase_prompt(session, user_id=user.id, prompt_id=prompt_id)
    return _purchase_response(row)
