"""Balance arithmetic for creator withdrawals.

Earnings are the all-time sum of the creator's revenue share. Every
withdrawal that is pending, approved or completed is held against them.
Rejected withdrawals are released.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol

MINIMUM_WITHDRAWAL = Decimal("100")

HELD_STATUSES = frozenset({"pending", "approved", "completed"})

PROCESSING_NOTICE = "Withdrawals are processed in batches from the 13th of each month, working days only."

_ZERO = Decimal("0")


class RevenueLike(Protocol):
    user_share: Decimal


class WithdrawalLike(Protocol):
    amount: Decimal
    status: str


def _money(value) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def total_earnings(revenue: Iterable[RevenueLike]) -> Decimal:
    return sum((_money(r.user_share) for r in revenue), _ZERO)


def withdrawn_or_pending(withdrawals: Iterable[WithdrawalLike]) -> Decimal:
    return sum((_money(w.amount) for w in withdrawals if w.status in HELD_STATUSES), _ZERO)


def available_balance(*, earnings: Decimal, held: Decimal) -> Decimal:
    return max(_ZERO, _money(earnings) - _money(held))


def compute_available_balance(
    revenue: Iterable[RevenueLike],
    withdrawals: Iterable[WithdrawalLike],
) -> Decimal:
    return available_balance(earnings=total_earnings(revenue), held=withdrawn_or_pending(withdrawals))
