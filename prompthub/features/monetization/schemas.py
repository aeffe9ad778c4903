from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class EligibilityResponse(BaseModel):
    meets_requirements: bool
    recent_prompts_count: int
    total_views: int
    required_prompts: int
    required_views: int


class MonetizationStatusItem(BaseModel):
    id: str
    user_id: str
    is_monetized: bool
    status: str
    requested_at: datetime
    approved_at: datetime | None
    rejected_at: datetime | None


class MonetizationOverviewResponse(BaseModel):
    status: MonetizationStatusItem | None
    is_monetized: bool
    eligibility: EligibilityResponse
