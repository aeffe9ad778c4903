from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import Collection, CollectionPrompt, Profile, Prompt
from prompthub.platform.errors import ConflictError, ForbiddenError, NotFoundError


async def _get_collection(session: AsyncSession, collection_id: str) -> Collection:
    result = await session.execute(select(Collection).where(Collection.id == collection_id))
    collection = result.scalar_one_or_none()
    if collection is None:
        raise NotFoundError("Collection not found")
    return collection


async def _owned_collection(session: AsyncSession, *, user_id: str, collection_id: str) -> Collection:
    collection = await _get_collection(session, collection_id)
    if collection.user_id != user_id:
        raise ForbiddenError()
    return collection


async def list_collections(session: AsyncSession, user_id: str) -> list[Collection]:
    result = await session.execute(
        select(Collection).where(Collection.user_id == user_id).order_by(Collection.created_at.desc())
    )
    return list(result.scalars().all())


async def create_collection(
    session: AsyncSession,
    *,
    user_id: str,
    name: str,
    description: str | None,
    is_public: bool,
) -> Collection:
    collection = Collection(user_id=user_id, name=name, description=description, is_public=is_public)
    session.add(collection)
    await session.commit()
    await session.refresh(collection)
    return collection


async def get_collection_detail(
    session: AsyncSession,
    *,
    collection_id: str,
    viewer_id: str | None,
) -> tuple[Collection, list[tuple[Prompt, str | None]]]:
    collection = await _get_collection(session, collection_id)
    if not collection.is_public and collection.user_id != viewer_id:
        # Private collections are invisible to everyone but the owner.
        raise NotFoundError("Collection not found")

    result = await session.execute(
        select(Prompt, Profile.username)
        .join(CollectionPrompt, CollectionPrompt.prompt_id == Prompt.id)
        .outerjoin(Profile, Profile.user_id == Prompt.user_id)
        .where(CollectionPrompt.collection_id == collection_id)
        .order_by(CollectionPrompt.added_at.desc())
    )
    return collection, [(prompt, username) for prompt, username in result.all()]


async def delete_collection(session: AsyncSession, *, user_id: str, collection_id: str) -> None:
    await _owned_collection(session, user_id=user_id, collection_id=collection_id)
    await session.execute(delete(Collection).where(Collection.id == collection_id, Collection.user_id == user_id))
    await session.commit()


async def add_prompt_to_collection(
    session: AsyncSession,
    *,
    user_id: str,
    collection_id: str,
    prompt_id: str,
) -> None:
    await _owned_collection(session, user_id=user_id, collection_id=collection_id)

    prompt = await session.execute(select(Prompt.id).where(Prompt.id == prompt_id))
    if prompt.scalar_one_or_none() is None:
        raise NotFoundError("Prompt not found")

    existing = await session.execute(
        select(CollectionPrompt.id).where(
            CollectionPrompt.collection_id == collection_id,
            CollectionPrompt.prompt_id == prompt_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("This prompt is already in the collection")

    session.add(CollectionPrompt(collection_id=collection_id, prompt_id=prompt_id))
    await session.commit()


async def remove_prompt_from_collection(
    session: AsyncSession,
    *,
    user_id: str,
    collection_id: str,
    prompt_id: str,
) -> None:
    await _owned_collection(session, user_id=user_id, collection_id=collection_id)
    result = await session.execute(
        delete(CollectionPrompt).where(
            CollectionPrompt.collection_id == collection_id,
            CollectionPrompt.prompt_id == prompt_id,
        )
    )
    if not result.rowcount:
        raise NotFoundError("Prompt is not in this collection")
    await session.commit()
