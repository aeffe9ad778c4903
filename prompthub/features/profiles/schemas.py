from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]{3,64}$"


class ProfileResponse(BaseModel):
    user_id: str
    username: str | None
    bio: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime


class ProfileCreateRequest(BaseModel):
    username: str | None = Field(default=None, pattern=USERNAME_PATTERN)
    bio: str | None = None
    avatar_url: str | None = Field(default=None, max_length=512)


class ProfileUpdateRequest(BaseModel):
    username: str | None = Field(default=None, pattern=USERNAME_PATTERN)
    bio: str | None = None
    avatar_url: str | None = Field(default=None, max_length=512)


class UsernameAvailabilityResponse(BaseModel):
    username: str
    available: bool
