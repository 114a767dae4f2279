from decimal import Decimal

import pytest

from easyride.modules.common.money import InvalidAmountError, cents_to_decimal, parse_amount_cents
from easyride.modules.profiles import Role
from easyride.modules.recharges import PaymentMethod, RechargeStatus, RechargeValidationError
from easyride.modules.recharges.validation import (
    parse_status_filter,
    validate_rejection_reason,
    validate_submission,
)
from easyride.schemas import CurrentUser


def _submit(**overrides):
    fields = {
        "user_id": "user-1",
        "amount": 100,
        "payment_method": "bkash",
        "phone_number": "01712345678",
        "transaction_id": "TXN123",
    }
    fields.update(overrides)
    return validate_submission(**fields)


@pytest.mark.parametrize("amount", [0, -50, "0", "-0.01", "abc", "NaN", "Infinity", True, "10.005"])
def test_rejects_invalid_amounts(amount):
    with pytest.raises(RechargeValidationError) as exc_info:
        _submit(amount=amount)
    assert exc_info.value.message == "Invalid amount"
    assert exc_info.value.field == "amount"


@pytest.mark.parametrize(
    ("amount", "expected_cents"),
    [(0.01, 1), ("0.01", 1), (100, 10000), ("250.25", 25025), (100.5, 10050)],
)
def test_accepts_positive_amounts(amount, expected_cents):
    assert _submit(amount=amount).amount_cents == expected_cents


@pytest.mark.parametrize("field", ["amount", "payment_method", "phone_number", "transaction_id"])
def test_missing_fields_rejected(field):
    with pytest.raises(RechargeValidationError, match="All fields are required"):
        _submit(**{field: None})


def test_blank_transaction_id_counts_as_missing():
    with pytest.raises(RechargeValidationError, match="All fields are required"):
        _submit(transaction_id="   ")


def test_payment_method_is_case_insensitive_and_normalized():
    submission = _submit(payment_method="BKASH")
    assert submission.payment_method is PaymentMethod.BKASH
    assert submission.payment_method.value == "bkash"


def test_unknown_payment_method_rejected():
    with pytest.raises(RechargeValidationError, match="Invalid payment method"):
        _submit(payment_method="PAYPAL")


@pytest.mark.parametrize("phone", ["123", "0171234567", "017123456789", "0171234567a"])
def test_malformed_phone_rejected(phone):
    with pytest.raises(RechargeValidationError, match="Invalid phone number format"):
        _submit(phone_number=phone)


@pytest.mark.parametrize("phone", ["01712345678", "017-1234-5678", "017 1234 5678", "0 1 7 1 2 3 4 5 6 7 8"])
def test_phone_separators_are_stripped(phone):
    assert _submit(phone_number=phone).phone_number == "01712345678"


def test_rejection_reason_required():
    with pytest.raises(RechargeValidationError, match="Rejection reason is required"):
        validate_rejection_reason("  ")
    assert validate_rejection_reason(" Invalid transaction ") == "Invalid transaction"


def test_status_filter_parsing():
    assert parse_status_filter(None) is None
    assert parse_status_filter("all") is None
    assert parse_status_filter("Pending") is RechargeStatus.PENDING
    with pytest.raises(RechargeValidationError, match="Invalid status filter"):
        parse_status_filter("cancelled")


def test_money_helpers_are_decimal_exact():
    total = parse_amount_cents("100.50") + parse_amount_cents("250.25")
    assert cents_to_decimal(total) == Decimal("350.75")
    assert str(cents_to_decimal(10000)) == "100.00"
    with pytest.raises(InvalidAmountError):
        parse_amount_cents("1e400")


@pytest.mark.parametrize(
    ("stored", "expected"),
    [("student", Role.PASSENGER), ("ADMIN", Role.ADMIN), ("conductor", Role.CONDUCTOR), (None, Role.PASSENGER), ("ghost", Role.PASSENGER)],
)
def test_role_normalization(stored, expected):
    assert Role.normalize(stored) is expected


def test_transaction_id_length_is_bounded():
    assert _submit(transaction_id="X" * 100).transaction_id == "X" * 100
    with pytest.raises(RechargeValidationError) as exc_info:
        _submit(transaction_id="X" * 101)
    assert exc_info.value.message == "Invalid transaction ID"
    assert exc_info.value.field == "transactionId"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"payment_method": 5}, "Invalid payment method"),
        ({"phone_number": 1712345678}, "Invalid phone number format"),
        ({"transaction_id": 12345}, "Invalid transaction ID"),
        ({"payment_method": ["bkash"]}, "Invalid payment method"),
    ],
)
def test_non_string_fields_rejected(overrides, message):
    with pytest.raises(RechargeValidationError) as exc_info:
        _submit(**overrides)
    assert exc_info.value.message == message


def test_admin_flag_follows_role():
    assert CurrentUser(id="u1", role="admin").is_admin
    assert not CurrentUser(id="u2", role="passenger").is_admin
