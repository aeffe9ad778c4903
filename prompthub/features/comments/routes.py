from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.comments.schemas import CommentCreateRequest, CommentResponse, CommentUpdateRequest
from prompthub.features.comments.services import add_comment, delete_comment, list_comments, update_comment
from prompthub.platform.db.models import Comment
from prompthub.platform.db.session import get_session
from prompthub.platform.ids import ResourceId
from prompthub.platform.security import get_current_user

router = APIRouter()


def _comment_response(comment: Comment, username: str | None) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        prompt_id=comment.prompt_id,
        user_id=comment.user_id,
        username=username,
        parent_id=comment.parent_id,
        text=comment.text,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


@router.get("/prompts/{prompt_id}/comments", response_model=list[CommentResponse])
async def list_for_prompt(
    prompt_id: ResourceId,
    session: AsyncSession = Depends(get_session),
) -> list[CommentResponse]:
    rows = await list_comments(session, prompt_id)
    return [_comment_response(comment, username) for comment, username in rows]


@router.post("/prompts/{prompt_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create(
    prompt_id: ResourceId,
    body: CommentCreateRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CommentResponse:
    comment, username = await add_comment(
        session,
        user_id=user.id,
        prompt_id=prompt_id,
        text=body.text,
        parent_id=body.parent_id,
    )
    return _comment_response(comment, username)


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update(
    comment_id: ResourceId,
    body: CommentUpdateRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> CommentResponse:
    comment, username = await update_comment(session, user_id=user.id, comment_id=comment_id, text=body.text)
    return _comment_response(comment, username)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    comment_id: ResourceId,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    await delete_comment(session, user_id=user.id, comment_id=comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
