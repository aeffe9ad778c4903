from pydantic import BaseModel


class SaveToggleResponse(BaseModel):
    prompt_id: str
    is_saved: bool
