from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class PurchaseResponse(BaseModel):
    id: str
    user_id: str
    prompt_id: str
    purchase_price: Decimal
    purchased_at: datetime


class PurchaseStatusResponse(BaseModel):
    prompt_id: str
    purchased: bool
