from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from prompthub.features.prompts.schemas import PromptResponse
from prompthub.platform.ids import UUID_PATTERN


class CollectionResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime


class CollectionDetailResponse(CollectionResponse):
    prompts: list[PromptResponse]


class CollectionCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = None
    is_public: bool = False


class CollectionAddPromptRequest(BaseModel):
    prompt_id: str = Field(pattern=UUID_PATTERN)
