from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.prompts import cache
from prompthub.features.prompts.repository import adjust_counter
from prompthub.platform.db.models import Comment, Profile, Prompt
from prompthub.platform.errors import ForbiddenError, NotFoundError

CommentWithUsername = tuple[Comment, str | None]


async def _require_prompt(session: AsyncSession, prompt_id: str) -> None:
    result = await session.execute(select(Prompt.id).where(Prompt.id == prompt_id))
    if result.scalar_one_or_none() is None:
        raise NotFoundError("Prompt not found")


async def _owned_comment(session: AsyncSession, *, user_id: str, comment_id: str) -> Comment:
    result = await session.execute(select(Comment).where(Comment.id == comment_id))
    comment = result.scalar_one_or_none()
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.user_id != user_id:
        raise ForbiddenError()
    return comment


async def _username(session: AsyncSession, user_id: str) -> str | None:
    result = await session.execute(select(Profile.username).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def list_comments(session: AsyncSession, prompt_id: str) -> list[CommentWithUsername]:
    await _require_prompt(session, prompt_id)
    result = await session.execute(
        select(Comment, Profile.username)
        .outerjoin(Profile, Profile.user_id == Comment.user_id)
        .where(Comment.prompt_id == prompt_id)
        .order_by(Comment.created_at.asc())
    )
    return [(comment, username) for comment, username in result.all()]


async def add_comment(
    session: AsyncSession,
    *,
    user_id: str,
    prompt_id: str,
    text: str,
    parent_id: str | None = None,
) -> CommentWithUsername:
    await _require_prompt(session, prompt_id)

    if parent_id:
        parent = await session.execute(
            select(Comment.id).where(Comment.id == parent_id, Comment.prompt_id == prompt_id)
        )
        if parent.scalar_one_or_none() is None:
            raise NotFoundError("Parent comment not found")

    comment = Comment(prompt_id=prompt_id, user_id=user_id, text=text, parent_id=parent_id or None)
    session.add(comment)
    await session.flush()
    await adjust_counter(session, prompt_id, "comments_count", 1)
    await session.commit()
    await session.refresh(comment)
    await cache.invalidate_trending()

    return comment, await _username(session, user_id)


async def update_comment(session: AsyncSession, *, user_id: str, comment_id: str, text: str) -> CommentWithUsername:
    comment = await _owned_comment(session, user_id=user_id, comment_id=comment_id)
    comment.text = text
    await session.commit()
    await session.refresh(comment)
    return comment, await _username(session, user_id)


async def _thread_ids(session: AsyncSession, root_id: str) -> list[str]:
    ids = [root_id]
    frontier = [root_id]
    while frontier:
        result = await session.execute(select(Comment.id).where(Comment.parent_id.in_(frontier)))
        frontier = [str(child_id) for child_id in result.scalars().all()]
        ids.extend(frontier)
    return ids


async def delete_comment(session: AsyncSession, *, user_id: str, comment_id: str) -> None:
    comment = await _owned_comment(session, user_id=user_id, comment_id=comment_id)
    prompt_id = comment.prompt_id

    # Replies are removed with their parent, so the counter drops by the whole thread.
    thread = await _thread_ids(session, comment.id)
    removed = await session.execute(delete(Comment).where(Comment.id.in_(thread)).returning(Comment.id))
    removed_count = len(removed.scalars().all())
    if removed_count:
        await adjust_counter(session, prompt_id, "comments_count", -removed_count)
    await session.commit()
    await cache.invalidate_trending()
