from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from prompthub.platform.ids import UUID_PATTERN


class CommentResponse(BaseModel):
    id: str
    prompt_id: str
    user_id: str
    username: str | None
    parent_id: str | None
    text: str
    created_at: datetime
    updated_at: datetime


class CommentCreateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)
    parent_id: str | None = Field(default=None, pattern=UUID_PATTERN)


class CommentUpdateRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)
