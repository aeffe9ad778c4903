from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.likes.schemas import LikeToggleResponse
from prompthub.features.likes.services import liked_prompt_ids, toggle_like
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_current_user

router = APIRouter()


@router.post("/prompts/{prompt_id}/like", response_model=LikeToggleResponse)
async def toggle(
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> LikeToggleResponse:
    is_liked, likes_count = await toggle_like(session, user_id=user.id, prompt_id=prompt_id)
    return LikeToggleResponse(prompt_id=prompt_id, is_liked=is_liked, likes_count=likes_count)


@router.get("/likes/me", response_model=list[str])
async def my_likes(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[str]:
    return await liked_prompt_ids(session, user.id)
