import pytest

from prompthub.features.withdrawals.schemas import BankTransferDetails, CryptoDetails, PayPalDetails
from prompthub.features.withdrawals.services import normalize_payment_method, parse_payment_details
from prompthub.platform.errors import MissingFieldError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("PayPal", "paypal"),
        ("bank", "bank_transfer"),
        ("Bank Transfer", "bank_transfer"),
        ("wire", "bank_transfer"),
        ("cryptocurrency", "crypto"),
        ("cheque", None),
    ],
)
def test_normalize_payment_method(raw: str, expected: str | None):
    assert normalize_payment_method(raw) == expected


def test_bank_transfer_details_parse_with_optional_codes():
    details = parse_payment_details(
        "bank",
        {"account_holder": "Ada", "account_number": "123", "bank_name": "First", "swift_code": "FIRSTUS"},
    )

    assert isinstance(details, BankTransferDetails)
    assert details.routing_number is None
    assert details.swift_code == "FIRSTUS"


def test_crypto_details_parse():
    details = parse_payment_details("crypto", {"network": "ethereum", "wallet_address": "0xabc"})

    assert isinstance(details, CryptoDetails)
    assert details.wallet_address == "0xabc"


def test_method_in_details_is_overridden_by_normalized_method():
    details = parse_payment_details("paypal", {"method": "crypto", "email": "a@example.com"})

    assert isinstance(details, PayPalDetails)


def test_missing_variant_fields_are_named():
    with pytest.raises(MissingFieldError) as excinfo:
        parse_payment_details("bank_transfer", {"account_holder": "Ada"})

    assert excinfo.value.fields == ["payment_details.account_number", "payment_details.bank_name"]


def test_invalid_paypal_email_is_rejected():
    with pytest.raises(MissingFieldError) as excinfo:
        parse_payment_details("paypal", {"email": "not-an-email"})

    assert excinfo.value.fields == ["payment_details.email"]


def test_unsupported_method_is_rejected():
    with pytest.raises(MissingFieldError) as excinfo:
        parse_payment_details("cheque", {"payee": "Ada"})

    assert excinfo.value.fields == ["payment_method"]
    assert "cheque" in excinfo.value.message
