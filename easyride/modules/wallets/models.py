"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from easyride.modules.common.money import cents_to_decimal


class TransactionType(str, Enum):
    RECHARGE = "recharge"


@dataclass(slots=True)
class WalletSnapshot:
    id: str
    user_id: str
    balance_cents: int
    currency: str
    updated_at: Optional[datetime]

    @property
    def balance(self) -> Decimal:
        return cents_to_decimal(self.balance_cents)


@dataclass(slots=True)
class WalletTransactionRecord:
    id: str
    wallet_id: str
    amount_cents: int
    type: TransactionType
    description: Optional[str]
    created_at: Optional[datetime]

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)
