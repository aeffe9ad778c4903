from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from prompthub.features.withdrawals.services import create_withdrawal_request, get_balance
from prompthub.platform.errors import BelowMinimumError, InsufficientBalanceError, MissingFieldError

_PAYPAL = {"email": "creator@example.com"}


class _FakeWithdrawalRepo:
    def __init__(self, *, earnings: list[str], withdrawals: list[tuple[str, str]] | None = None) -> None:
        self.revenue = [SimpleNamespace(user_share=Decimal(v)) for v in earnings]
        self.withdrawals = [
            SimpleNamespace(amount=Decimal(amount), status=status) for amount, status in withdrawals or []
        ]
        self.locked: list[str] = []
        self.commits = 0

    async def lock_user(self, user_id):
        self.locked.append(user_id)

    async def list_revenue(self, user_id):
        return list(self.revenue)

    async def list_withdrawals(self, user_id):
        return list(self.withdrawals)

    async def add_withdrawal(self, *, user_id, amount, payment_method, payment_details):
        row = SimpleNamespace(
            id=f"w-{len(self.withdrawals) + 1}",
            user_id=user_id,
            amount=amount,
            status="pending",
            payment_method=payment_method,
            payment_details=payment_details,
            notes=None,
            requested_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            processed_at=None,
        )
        self.withdrawals.append(row)
        return row

    async def commit(self, row=None):
        self.commits += 1


@pytest.mark.asyncio
async def test_amount_below_minimum_is_rejected_before_anything_else() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    with pytest.raises(BelowMinimumError):
        await create_withdrawal_request(
            repo,
            user_id="u1",
            amount=Decimal("50"),
            payment_method=None,
            payment_details=None,
        )
    assert repo.locked == []
    assert repo.commits == 0


@pytest.mark.asyncio
async def test_withdrawing_exact_available_balance_succeeds() -> None:
    repo = _FakeWithdrawalRepo(earnings=["500"], withdrawals=[("200", "completed")])

    row = await create_withdrawal_request(
        repo,
        user_id="u1",
        amount=Decimal("300"),
        payment_method="paypal",
        payment_details=_PAYPAL,
    )

    assert row.status == "pending"
    assert row.amount == Decimal("300")
    assert row.payment_details == {"method": "paypal", "email": "creator@example.com"}
    assert repo.locked == ["u1"]
    assert repo.commits == 1

    summary = await get_balance(repo, "u1")
    assert summary.available_balance == Decimal("0")


@pytest.mark.asyncio
async def test_one_dollar_over_balance_is_rejected() -> None:
    repo = _FakeWithdrawalRepo(earnings=["500"], withdrawals=[("200", "completed")])

    with pytest.raises(InsufficientBalanceError) as excinfo:
        await create_withdrawal_request(
            repo,
            user_id="u1",
            amount=Decimal("301"),
            payment_method="paypal",
            payment_details=_PAYPAL,
        )
    assert excinfo.value.details["available_balance"] == "300"
    assert repo.commits == 0


@pytest.mark.asyncio
async def test_rejected_withdrawal_frees_balance() -> None:
    repo = _FakeWithdrawalRepo(earnings=["500"], withdrawals=[("400", "rejected")])

    row = await create_withdrawal_request(
        repo,
        user_id="u1",
        amount=Decimal("500"),
        payment_method="paypal",
        payment_details=_PAYPAL,
    )
    assert row.amount == Decimal("500")


@pytest.mark.asyncio
async def test_missing_payment_fields_are_reported() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    with pytest.raises(MissingFieldError) as excinfo:
        await create_withdrawal_request(
            repo,
            user_id="u1",
            amount=Decimal("150"),
            payment_method="",
            payment_details={},
        )
    assert excinfo.value.fields == ["payment_method", "payment_details"]
    assert repo.locked == []


@pytest.mark.asyncio
async def test_missing_amount_is_a_missing_field() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    with pytest.raises(MissingFieldError) as excinfo:
        await create_withdrawal_request(
            repo,
            user_id="u1",
            amount=None,
            payment_method="paypal",
            payment_details=_PAYPAL,
        )
    assert excinfo.value.fields == ["amount"]


@pytest.mark.asyncio
async def test_payment_method_is_normalized() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    row = await create_withdrawal_request(
        repo,
        user_id="u1",
        amount="120.50",
        payment_method="PayPal",
        payment_details=_PAYPAL,
    )
    assert row.payment_method == "paypal"
    assert row.amount == Decimal("120.50")


@pytest.mark.asyncio
async def test_sub_cent_amount_is_rejected() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    with pytest.raises(MissingFieldError) as excinfo:
        await create_withdrawal_request(
            repo,
            user_id="u1",
            amount="120.555",
            payment_method="paypal",
            payment_details=_PAYPAL,
        )
    assert excinfo.value.fields == ["amount"]
    assert repo.locked == []


@pytest.mark.asyncio
async def test_trailing_zeros_are_not_extra_precision() -> None:
    repo = _FakeWithdrawalRepo(earnings=["1000"])

    row = await create_withdrawal_request(
        repo,
        user_id="u1",
        amount="120.500",
        payment_method="paypal",
        payment_details=_PAYPAL,
    )
    assert row.amount == Decimal("120.5")
