"""Wallet recharge requests and the admin approval workflow."""

from .exceptions import (
    DuplicateTransactionError,
    RechargeAlreadyProcessedError,
    RechargeError,
    RechargeNotFoundError,
    RechargeValidationError,
)
from .models import (
    PaymentMethod,
    RechargeDecision,
    RechargeRequest,
    RechargeRequestWithUser,
    RechargeStatus,
    RequesterInfo,
)
from .service import RechargeService

__all__ = [
    "DuplicateTransactionError",
    "PaymentMethod",
    "RechargeAlreadyProcessedError",
    "RechargeDecision",
    "RechargeError",
    "RechargeNotFoundError",
    "RechargeRequest",
    "RechargeRequestWithUser",
    "RechargeService",
    "RechargeStatus",
    "RechargeValidationError",
    "RequesterInfo",
]
