"""Helpers shared across domain modules."""

from .money import InvalidAmountError, cents_to_decimal, parse_amount_cents
from .unit_of_work import UnitOfWork

__all__ = ["InvalidAmountError", "UnitOfWork", "cents_to_decimal", "parse_amount_cents"]
