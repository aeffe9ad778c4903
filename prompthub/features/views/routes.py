from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.views.services import track_view
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_optional_user

router = APIRouter()


class ViewTrackedResponse(BaseModel):
    prompt_id: str
    views_count: int


@router.post("/prompts/{prompt_id}/views", response_model=ViewTrackedResponse)
async def track(
    prompt_id: ResourceId,
    user=Depends(get_optional_user),
    session: AsyncSession = Depends(get_session),
) -> ViewTrackedResponse:
    views_count = await track_view(session, prompt_id=prompt_id, user_id=user.id if user is not None else None)
    return ViewTrackedResponse(prompt_id=prompt_id, views_count=views_count)
