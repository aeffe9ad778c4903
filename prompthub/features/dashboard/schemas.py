from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class DashboardTopPrompt(BaseModel):
    id: str
    title: str
    views_count: int
    likes_count: int
    comments_count: int


class DashboardResponse(BaseModel):
    total_prompts: int
    total_views: int
    total_likes: int
    total_comments: int
    paid_prompts: int
    gross_earnings: Decimal
    net_earnings: Decimal
    top_prompts: list[DashboardTopPrompt]
