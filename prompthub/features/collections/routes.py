from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.collections.schemas import (
    CollectionAddPromptRequest,
    CollectionCreateRequest,
    CollectionDetailResponse,
    CollectionResponse,
)
from prompthub.features.collections.services import (
    add_prompt_to_collection,
    create_collection,
    delete_collection,
    get_collection_detail,
    list_collections,
    remove_prompt_from_collection,
)
from prompthub.features.prompts.routes import prompt_response
from prompthub.platform.db.models import Collection
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_current_user, get_optional_user

router = APIRouter(prefix="/collections")


def _collection_response(collection: Collection) -> CollectionResponse:
    return CollectionResponse(
        id=collection.id,
        user_id=collection.user_id,
        name=collection.name,
        description=collection.description,
        is_public=collection.is_public,
        created_at=collection.created_at,
        updated_at=collection.updated_at,
    )


@router.get("", response_model=list[CollectionResponse])
async def list_mine(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> list[CollectionResponse]:
    rows = await list_collections(session, user.id)
    return [_collection_response(row) for row in rows]


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
async def create(
    body: CollectionCreateRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CollectionResponse:
    collection = await create_collection(
        session,
        user_id=user.id,
        name=body.name,
        description=body.description,
        is_public=body.is_public,
    )
    return _collection_response(collection)


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
async def detail(
    collection_id: ResourceId,
    user=Depends(get_optional_user),
    session: AsyncSession = Depends(get_session),
) -> CollectionDetailResponse:
    collection, prompts = await get_collection_detail(
        session,
        collection_id=collection_id,
        viewer_id=user.id if user is not None else None,
    )
    base = _collection_response(collection)
    return CollectionDetailResponse(
        **base.model_dump(),
        prompts=[prompt_response(prompt, username) for prompt, username in prompts],
    )


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    collection_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    await delete_collection(session, user_id=user.id, collection_id=collection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{collection_id}/prompts", status_code=status.HTTP_204_NO_CONTENT)
async def add_prompt(
    collection_id: ResourceId,
    body: CollectionAddPromptRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    await add_prompt_to_collection(session, user_id=user.id, collection_id=collection_id, prompt_id=body.prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{collection_id}/prompts/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_prompt(
    collection_id: ResourceId,
    prompt_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    await remove_prompt_from_collection(session, user_id=user.id, collection_id=collection_id, prompt_id=prompt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
