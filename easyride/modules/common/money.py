"""Fixed-point helpers for wallet amounts.

Amounts are stored as integer minor units (1/100 of the currency) and
surfaced as :class:`~decimal.Decimal` with two places.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
# largest value a 32-bit integer column holds
MAX_AMOUNT_CENTS = 2_147_483_647


class InvalidAmountError(ValueError):
    """Raised when a value cannot be represented as a positive money amount."""


def parse_amount_cents(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError(value) from exc
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError(value)
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation as exc:
        raise InvalidAmountError(value) from exc
    if amount != quantized:
        # sub-cent precision cannot be stored without rounding
        raise InvalidAmountError(value)
    cents = int(quantized * 100)
    if cents > MAX_AMOUNT_CENTS:
        raise InvalidAmountError(value)
    return cents


def cents_to_decimal(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)
