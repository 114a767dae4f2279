"""Input validation for recharge submissions and admin actions."""

from __future__ import annotations

import re
from typing import Any

from easyride.modules.common.money import InvalidAmountError, parse_amount_cents

from .exceptions import RechargeValidationError
from .models import PaymentMethod, RechargeStatus, RechargeSubmission

PHONE_PATTERN = re.compile(r"^[0-9]{11}$")
_PHONE_SEPARATORS = re.compile(r"[\s-]")
# matches recharge_requests.transaction_id
MAX_TRANSACTION_ID_LENGTH = 100


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_payment_method(value: Any) -> PaymentMethod:
    if not isinstance(value, str):
        raise RechargeValidationError("Invalid payment method", field="paymentMethod")
    try:
        return PaymentMethod(value.strip().lower())
    except ValueError as exc:
        raise RechargeValidationError("Invalid payment method", field="paymentMethod") from exc


def validate_phone_number(value: Any) -> str:
    """Return the number with spaces and hyphens removed."""
    digits = _PHONE_SEPARATORS.sub("", value) if isinstance(value, str) else ""
    if not PHONE_PATTERN.match(digits):
        raise RechargeValidationError("Invalid phone number format", field="phoneNumber")
    return digits


def validate_transaction_id(value: Any) -> str:
    if not isinstance(value, str) or len(value.strip()) > MAX_TRANSACTION_ID_LENGTH:
        raise RechargeValidationError("Invalid transaction ID", field="transactionId")
    return value.strip()


def validate_submission(
    *,
    user_id: str,
    amount: Any,
    payment_method: Any,
    phone_number: Any,
    transaction_id: Any,
) -> RechargeSubmission:
    """Check a raw submission and return the normalized form.

    Raises :class:`RechargeValidationError` for the first problem found,
    in the order: missing fields, amount, payment method, phone number,
    transaction id.
    """
    if any(_is_blank(value) for value in (amount, payment_method, phone_number, transaction_id)):
        raise RechargeValidationError("All fields are required")

    try:
        amount_cents = parse_amount_cents(amount)
    except InvalidAmountError as exc:
        raise RechargeValidationError("Invalid amount", field="amount") from exc

    method = normalize_payment_method(payment_method)
    phone = validate_phone_number(phone_number)
    txid = validate_transaction_id(transaction_id)

    return RechargeSubmission(
        user_id=user_id,
        amount_cents=amount_cents,
        payment_method=method,
        phone_number=phone,
        transaction_id=txid,
    )


def validate_rejection_reason(reason: str | None) -> str:
    if _is_blank(reason):
        raise RechargeValidationError("Rejection reason is required", field="reason")
    return reason.strip()


def parse_status_filter(value: str | None) -> RechargeStatus | None:
    if _is_blank(value) or value.strip().lower() == "all":
        return None
    try:
        return RechargeStatus(value.strip().lower())
    except ValueError as exc:
        raise RechargeValidationError("Invalid status filter", field="status") from exc
