"""Domain models for wallet recharge requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from easyride.modules.common.money import cents_to_decimal


class RechargeStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentMethod(str, Enum):
    BKASH = "bkash"
    NAGAD = "nagad"
    ROCKET = "rocket"


@dataclass(slots=True)
class RechargeRequest:
    id: str
    user_id: str
    amount_cents: int
    payment_method: PaymentMethod
    phone_number: str
    transaction_id: str
    status: RechargeStatus
    created_at: Optional[datetime]
    rejection_reason: Optional[str] = None
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)

    @property
    def is_pending(self) -> bool:
        return self.status is RechargeStatus.PENDING


@dataclass(slots=True)
class RequesterInfo:
    full_name: str = "Unknown"
    phone_number: str = "N/A"


@dataclass(slots=True)
class RechargeRequestWithUser:
    request: RechargeRequest
    user: RequesterInfo = field(default_factory=RequesterInfo)


@dataclass(slots=True)
class RechargeSubmission:
    """Validated recharge submission ready to be stored."""

    user_id: str
    amount_cents: int
    payment_method: PaymentMethod
    phone_number: str
    transaction_id: str


@dataclass(slots=True)
class RechargeDecision:
    request: RechargeRequest
    message: str
    balance: Optional[Decimal] = None
