"""Wallet domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from .models import TransactionType, WalletSnapshot, WalletTransactionRecord
from .repository import WalletRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository
    currency: str = "BDT"

    @classmethod
    def with_session(cls, session: AsyncSession, currency: str = "BDT") -> "WalletService":
        from easyride.infrastructure.database.repositories.wallet_repository import SqlWalletRepository

        return cls(SqlWalletRepository(session), currency)

    async def ensure_wallet(self, user_id: str) -> WalletSnapshot:
        wallet = await self.repository.get_wallet(user_id)
        if wallet is None:
            wallet = await self.repository.create_wallet(user_id, self.currency)
            logger.info("Created wallet %s for user %s", wallet.id, user_id)
        return wallet

    async def get_balance(self, user_id: str) -> Decimal:
        wallet = await self.ensure_wallet(user_id)
        return wallet.balance

    async def credit_amount(
        self,
        *,
        user_id: str,
        amount_cents: int,
        type: TransactionType = TransactionType.RECHARGE,
        description: str | None = None,
    ) -> WalletSnapshot:
        """Add ``amount_cents`` to the user's wallet and append a ledger entry."""
        if amount_cents <= 0:
            raise ValueError("credit amount must be positive")
        wallet = await self.ensure_wallet(user_id)
        updated = await self.repository.update_balance(user_id, amount_cents, datetime.now(timezone.utc))
        if updated is None:
            raise LookupError(f"wallet for user {user_id} disappeared during credit")
        await self.repository.add_transaction(
            wallet_id=wallet.id,
            amount_cents=amount_cents,
            type=type,
            description=description,
        )
        return updated

    async def list_transactions(self, user_id: str, limit: int = 20, offset: int = 0) -> list[WalletTransactionRecord]:
        wallet = await self.repository.get_wallet(user_id)
        if wallet is None:
            return []
        rows = await self.repository.list_transactions(wallet.id, limit, offset)
        return list(rows)
