"""Repository protocol for wallet operations."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import TransactionType, WalletSnapshot, WalletTransactionRecord


class WalletRepository(Protocol):
    async def get_wallet(self, user_id: str) -> WalletSnapshot | None:
        ...

    async def create_wallet(self, user_id: str, currency: str) -> WalletSnapshot:
        """Insert a zero-balance wallet, returning the existing one if another writer won."""
        ...

    async def update_balance(self, user_id: str, delta_cents: int, updated_at: datetime) -> WalletSnapshot | None:
        ...

    async def add_transaction(
        self,
        *,
        wallet_id: str,
        amount_cents: int,
        type: TransactionType,
        description: str | None,
    ) -> WalletTransactionRecord:
        ...

    async def list_transactions(self, wallet_id: str, limit: int, offset: int) -> Sequence[WalletTransactionRecord]:
        ...
