from pydantic import BaseModel


class LikeToggleResponse(BaseModel):
    prompt_id: str
    is_liked: bool
    likes_count: int
