from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from pydantic import TypeAdapter, ValidationError

from prompthub.features.withdrawals.accounting import (
    MINIMUM_WITHDRAWAL,
    available_balance,
    total_earnings,
    withdrawn_or_pending,
)
from prompthub.features.withdrawals.repository import WithdrawalRepository
from prompthub.features.withdrawals.schemas import PaymentDetails
from prompthub.platform.db.models import WithdrawalRequest
from prompthub.platform.errors import BelowMinimumError, InsufficientBalanceError, MissingFieldError

logger = logging.getLogger(__name__)

_details_adapter: TypeAdapter[PaymentDetails] = TypeAdapter(PaymentDetails)

_METHOD_ALIASES = {
    "paypal": "paypal",
    "bank": "bank_transfer",
    "bank_transfer": "bank_transfer",
    "wire": "bank_transfer",
    "crypto": "crypto",
    "cryptocurrency": "crypto",
}


@dataclass(frozen=True)
class BalanceSummary:
    total_earnings: Decimal
    withdrawn_or_pending: Decimal
    available_balance: Decimal


def normalize_payment_method(raw: str) -> str | None:
    key = raw.strip().lower().replace("-", "_").replace(" ", "_")
    return _METHOD_ALIASES.get(key)


def parse_payment_details(payment_method: str | None, payment_details: dict | None) -> PaymentDetails:
    missing: list[str] = []
    if not isinstance(payment_method, str) or not payment_method.strip():
        missing.append("payment_method")
    if not isinstance(payment_details, dict) or not payment_details:
        missing.append("payment_details")
    if missing:
        raise MissingFieldError(missing)

    method = normalize_payment_method(payment_method)
    if method is None:
        raise MissingFieldError(["payment_method"], message=f"Unsupported payment method: {payment_method}")

    try:
        return _details_adapter.validate_python({**payment_details, "method": method})
    except ValidationError as exc:
        fields: list[str] = []
        for error in exc.errors():
            path = [str(part) for part in error["loc"][1:]]
            name = "payment_details." + ".".join(path) if path else "payment_details"
            if name not in fields:
                fields.append(name)
        raise MissingFieldError(fields or ["payment_details"]) from exc


def _coerce_amount(amount) -> Decimal:
    if amount is None:
        raise MissingFieldError(["amount"])
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as exc:
        raise MissingFieldError(["amount"], message="Amount must be a number") from exc
    if not value.is_finite():
        raise MissingFieldError(["amount"], message="Amount must be a number")
    if value.normalize().as_tuple().exponent < -2:
        raise MissingFieldError(["amount"], message="Amount must have at most two decimal places")
    return value


async def get_balance(repo: WithdrawalRepository, user_id: str) -> BalanceSummary:
    revenue = await repo.list_revenue(user_id)
    withdrawals = await repo.list_withdrawals(user_id)

    earnings = total_earnings(revenue)
    held = withdrawn_or_pending(withdrawals)
    return BalanceSummary(
        total_earnings=earnings,
        withdrawn_or_pending=held,
        available_balance=available_balance(earnings=earnings, held=held),
    )


async def create_withdrawal_request(
    repo: WithdrawalRepository,
    *,
    user_id: str,
    amount,
    payment_method: str | None,
    payment_details: dict | None,
) -> WithdrawalRequest:
    value = _coerce_amount(amount)
    if value < MINIMUM_WITHDRAWAL:
        raise BelowMinimumError(
            f"Minimum withdrawal amount is ${MINIMUM_WITHDRAWAL}",
            details={"minimum": str(MINIMUM_WITHDRAWAL), "amount": str(value)},
        )

    details = parse_payment_details(payment_method, payment_details)

    # Serializes concurrent requests from the same user until commit.
    await repo.lock_user(user_id)
    summary = await get_balance(repo, user_id)
    if value > summary.available_balance:
        raise InsufficientBalanceError(
            "Insufficient balance",
            details={"available_balance": str(summary.available_balance), "amount": str(value)},
        )

    row = await repo.add_withdrawal(
        user_id=user_id,
        amount=value,
        payment_method=details.method,
        payment_details=details.model_dump(mode="json"),
    )
    await repo.commit(row)

    logger.info(
        "Withdrawal requested: id=%s user=%s amount=%s method=%s",
        row.id,
        user_id,
        value,
        details.method,
    )
    return row
