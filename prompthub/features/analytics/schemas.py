from pydantic import BaseModel


class PlatformAnalyticsResponse(BaseModel):
    total_views: int
    recent_prompts: int
    active_creators: int
    window_days: int
