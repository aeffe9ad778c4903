from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.prompts.ranking import engagement_score
from prompthub.features.prompts.repository import PromptRepository
from prompthub.features.prompts.schemas import (
    PromptCategory,
    PromptCreateRequest,
    PromptResponse,
    PromptStepItem,
    PromptStepsCreateRequest,
    Timeframe,
)
from prompthub.features.prompts.services import (
    add_prompt_steps,
    create_prompt,
    delete_prompt,
    get_prompt,
    list_prompts,
    trending_prompts,
)
from prompthub.platform.config import settings
from prompthub.platform.db.models import Prompt, PromptStep
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import OptionalResourceIdQuery, ResourceId
from prompthub.platform.security import get_current_user

router = APIRouter(prefix="/prompts")


def get_prompt_repository(session: AsyncSession = Depends(get_session)) -> PromptRepository:
    return PromptRepository(session)


def _step_item(step: PromptStep) -> PromptStepItem:
    return PromptStepItem(id=step.id, step_number=step.step_number, step_text=step.step_text)


def prompt_response(prompt: Prompt, username: str | None, steps: list[PromptStep] | None = None) -> PromptResponse:
    return PromptResponse(
        id=prompt.id,
        user_id=prompt.user_id,
        username=username,
        title=prompt.title,
        description=prompt.description,
        prompt_text=prompt.prompt_text,
        category=prompt.category,
        output_url=prompt.output_url,
        likes_count=int(prompt.likes_count or 0),
        comments_count=int(prompt.comments_count or 0),
        views_count=int(prompt.views_count or 0),
        engagement_score=engagement_score(likes_count=prompt.likes_count, comments_count=prompt.comments_count),
        is_paid=bool(prompt.is_paid),
        price=prompt.price,
        steps=[_step_item(step) for step in steps or []],
        created_at=prompt.created_at,
        updated_at=prompt.updated_at,
    )


async def _responses(repo: PromptRepository, rows: list[tuple[Prompt, str | None]]) -> list[PromptResponse]:
    steps = await repo.list_steps([prompt.id for prompt, _ in rows])
    return [prompt_response(prompt, username, steps.get(prompt.id)) for prompt, username in rows]


@router.get("", response_model=list[PromptResponse])
async def list_all(
    category: PromptCategory | None = None,
    search: str | None = Query(default=None, max_length=200),
    user_id: OptionalResourceIdQuery = None,
    trending: bool = False,
    limit: int = Query(default=100, ge=1, le=200),
    repo: PromptRepository = Depends(get_prompt_repository),
) -> list[PromptResponse]:
    rows = await list_prompts(
        repo,
        category=category,
        search=search,
        user_id=user_id,
        trending=trending,
        limit=limit,
    )
    return await _responses(repo, rows)


@router.get("/trending", response_model=list[PromptResponse])
async def trending(
    timeframe: Timeframe = "week",
    category: PromptCategory | None = None,
    limit: int | None = Query(default=None, ge=1, le=200),
    repo: PromptRepository = Depends(get_prompt_repository),
) -> list[PromptResponse]:
    rows = await trending_prompts(
        repo,
        timeframe=timeframe,
        category=category,
        limit=limit or settings.trending_default_limit,
    )
    return await _responses(repo, rows)


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_one(
    prompt_id: ResourceId,
    repo: PromptRepository = Depends(get_prompt_repository),
) -> PromptResponse:
    prompt, username = await get_prompt(repo, prompt_id)
    steps = await repo.list_steps([prompt.id])
    return prompt_response(prompt, username, steps.get(prompt.id))


@router.post("", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
async def create(
    body: PromptCreateRequest,
    user=Depends(get_current_user),
    repo: PromptRepository = Depends(get_prompt_repository),
) -> PromptResponse:
    prompt = await create_prompt(repo, user_id=user.id, body=body)
    _, username = await get_prompt(repo, prompt.id)
    return prompt_response(prompt, username)


@router.post("/{prompt_id}/steps", response_model=list[PromptStepItem], status_code=status.HTTP_201_CREATED)
async def create_steps(
    prompt_id: ResourceId,
    body: PromptStepsCreateRequest,
    user=Depends(get_current_user),
    repo: PromptRepository = Depends(get_prompt_repository),
) -> list[PromptStepItem]:
    rows = await add_prompt_steps(repo, user_id=user.id, prompt_id=prompt_id, steps=body.steps)
    return [_step_item(step) for step in rows]


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    repo: PromptRepository = Depends(get_prompt_repository),
) -> Response:
    await delete_prompt(repo, user_id=user.id, prompt_id=prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
