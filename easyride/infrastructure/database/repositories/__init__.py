"""SQLAlchemy-backed repository implementations."""

from .profile_repository import SqlProfileRepository
from .recharge_repository import SqlRechargeRequestRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlProfileRepository",
    "SqlRechargeRequestRepository",
    "SqlWalletRepository",
]
