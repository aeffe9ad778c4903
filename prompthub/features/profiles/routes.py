from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompthub.features.profiles.schemas import (
    ProfileCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UsernameAvailabilityResponse,
)
from prompthub.features.profiles.services import create_profile, get_profile, update_profile, username_available
from prompthub.platform.db.models import Profile
from prompthub.platform.db.session import get_session
from prompthub.platform.security import get_current_user

router = APIRouter(prefix="/profiles")


def _profile_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        user_id=profile.user_id,
        username=profile.username,
        bio=profile.bio,
        avatar_url=profile.avatar_url,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.get("/me", response_model=ProfileResponse)
async def me(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    return _profile_response(await get_profile(session, user.id))


@router.post("/me", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_me(
    body: ProfileCreateRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    profile = await create_profile(session, user_id=user.id, fields=body.model_dump())
    return _profile_response(profile)


@router.patch("/me", response_model=ProfileResponse)
async def update_me(
    body: ProfileUpdateRequest,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    profile = await update_profile(session, user_id=user.id, fields=body.model_dump(exclude_unset=True))
    return _profile_response(profile)


@router.get("/username-available", response_model=UsernameAvailabilityResponse)
async def check_username(
    username: str = Query(min_length=1, max_length=64),
    session: AsyncSession = Depends(get_session),
) -> UsernameAvailabilityResponse:
    available = await username_available(session, username)
    return UsernameAvailabilityResponse(username=username, available=available)
