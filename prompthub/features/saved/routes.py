from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.saved.schemas import SaveToggleResponse
from prompthub.features.saved.services import saved_prompt_ids, toggle_save
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_current_user

router = APIRouter()


@router.post("/prompts/{prompt_id}/save", response_model=SaveToggleResponse)
async def toggle(
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> SaveToggleResponse:
    is_saved = await toggle_save(session, user_id=user.id, prompt_id=prompt_id)
    return SaveToggleResponse(prompt_id=prompt_id, is_saved=is_saved)


@router.get("/saved/me", response_model=list[str])
async def my_saved(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[str]:
    return await saved_prompt_ids(session, user.id)
