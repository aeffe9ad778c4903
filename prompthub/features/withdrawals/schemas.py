from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, EmailStr, Field


class PayPalDetails(BaseModel):
    method: Literal["paypal"] = "paypal"
    email: EmailStr


class BankTransferDetails(BaseModel):
    method: Literal["bank_transfer"] = "bank_transfer"
    account_holder: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    bank_name: str = Field(min_length=1)
    routing_number: str | None = None
    swift_code: str | None = None


class CryptoDetails(BaseModel):
    method: Literal["crypto"] = "crypto"
    network: str = Field(min_length=1)
    wallet_address: str = Field(min_length=1)


PaymentDetails = Annotated[
    Union[PayPalDetails, BankTransferDetails, CryptoDetails],
    Field(discriminator="method"),
]


class WithdrawalCreateRequest(BaseModel):
    amount: Decimal | None = None
    payment_method: str | None = None
    payment_details: dict | None = None


class WithdrawalResponse(BaseModel):
    id: str
    user_id: str
    amount: Decimal
    status: str
    payment_method: str | None
    payment_details: PaymentDetails | None
    notes: str | None
    requested_at: datetime
    processed_at: datetime | None


class BalanceResponse(BaseModel):
    total_earnings: Decimal
    withdrawn_or_pending: Decimal
    available_balance: Decimal
    minimum_withdrawal: Decimal
    processing_notice: str


class RevenueItem(BaseModel):
    id: str
    prompt_id: str
    revenue_amount: Decimal
    platform_share: Decimal
    user_share: Decimal
    ad_impressions: int
    revenue_date: datetime
