from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

PromptCategory = Literal[
    "art",
    "coding",
    "writing",
    "marketing",
    "business",
    "education",
    "productivity",
    "entertainment",
    "other",
]

Timeframe = Literal["day", "week", "month", "year", "all"]

# Largest value a NUMERIC(10, 2) column holds.
MAX_PRICE = Decimal("99999999.99")


class PromptStepItem(BaseModel):
    id: str
    step_number: int
    step_text: str


class PromptResponse(BaseModel):
    id: str
    user_id: str
    username: str | None
    title: str
    description: str | None
    prompt_text: str
    category: PromptCategory
    output_url: str | None
    likes_count: int
    comments_count: int
    views_count: int
    engagement_score: int
    is_paid: bool
    price: Decimal | None
    steps: list[PromptStepItem] = []
    created_at: datetime
    updated_at: datetime


class PromptCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    prompt_text: str = Field(min_length=1)
    category: PromptCategory = "other"
    output_url: str | None = None
    is_paid: bool = False
    price: Decimal | None = Field(default=None, ge=0, le=MAX_PRICE, decimal_places=2)


class PromptStepCreate(BaseModel):
    step_number: int = Field(ge=1)
    step_text: str = Field(min_length=1)


class PromptStepsCreateRequest(BaseModel):
    steps: list[PromptStepCreate] = Field(min_length=1)
