"""Wallet domain exports"""

from .models import TransactionType, WalletSnapshot, WalletTransactionRecord
from .service import WalletService

__all__ = [
    "TransactionType",
    "WalletSnapshot",
    "WalletTransactionRecord",
    "WalletService",
]
