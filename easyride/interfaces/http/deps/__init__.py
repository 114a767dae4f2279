"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .recharge import get_recharge_service, get_wallet_service

__all__ = [
    "get_db_session",
    "get_recharge_service",
    "get_wallet_service",
]
