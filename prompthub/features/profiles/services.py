from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.platform.db.models import Profile
from prompthub.platform.errors import ConflictError, NotFoundError


async def get_profile(session: AsyncSession, user_id: str) -> Profile:
    result = await session.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def username_available(session: AsyncSession, username: str, *, exclude_user_id: str | None = None) -> bool:
    stmt = select(Profile.user_id).where(func.lower(Profile.username) == username.strip().lower())
    if exclude_user_id is not None:
        stmt = stmt.where(Profile.user_id != exclude_user_id)
    result = await session.execute(stmt)
    return result.first() is None


async def _ensure_username_free(session: AsyncSession, username: str | None, user_id: str) -> None:
    if username is None:
        return
    if not await username_available(session, username, exclude_user_id=user_id):
        raise ConflictError("Username is already taken", details={"username": username})


async def create_profile(session: AsyncSession, *, user_id: str, fields: dict) -> Profile:
    existing = await session.execute(select(Profile.user_id).where(Profile.user_id == user_id))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("Profile already exists")

    await _ensure_username_free(session, fields.get("username"), user_id)

    profile = Profile(user_id=user_id, **fields)
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    return profile


async def update_profile(session: AsyncSession, *, user_id: str, fields: dict) -> Profile:
    profile = await get_profile(session, user_id)
    await _ensure_username_free(session, fields.get("username"), user_id)

    for key, value in fields.items():
        setattr(profile, key, value)
    await session.commit()
    await session.refresh(profile)
    return profile
