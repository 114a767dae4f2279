"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.db.models import Wallet, WalletTransaction
from easyride.modules.wallets.models import TransactionType, WalletSnapshot, WalletTransactionRecord


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, user_id: str) -> WalletSnapshot | None:
        model = await self._get_model(user_id)
        return self._to_snapshot(model) if model else None

    async def create_wallet(self, user_id: str, currency: str) -> WalletSnapshot:
        wallet = Wallet(user_id=user_id, currency=currency, balance_cents=0)
        try:
            async with self.session.begin_nested():
                self.session.add(wallet)
                await self.session.flush()
        except IntegrityError:
            # a concurrent request created the wallet first
            existing = await self._get_model(user_id)
            if existing is None:
                raise
            return self._to_snapshot(existing)
        return self._to_snapshot(wallet)

    async def update_balance(self, user_id: str, delta_cents: int, updated_at: datetime) -> WalletSnapshot | None:
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(balance_cents=Wallet.balance_cents + delta_cents, updated_at=updated_at)
            .execution_options(synchronize_session="fetch")
            .returning(Wallet)
        )
        result = await self.session.execute(stmt)
        wallet = result.scalars().first()
        return self._to_snapshot(wallet) if wallet else None

    async def add_transaction(
        self,
        *,
        wallet_id: str,
        amount_cents: int,
        type: TransactionType,
        description: str | None,
    ) -> WalletTransactionRecord:
        tx = WalletTransaction(
            wallet_id=wallet_id,
            amount_cents=amount_cents,
            type=type.value,
            description=description,
        )
        self.session.add(tx)
        await self.session.flush()
        return self._to_transaction(tx)

    async def list_transactions(self, wallet_id: str, limit: int, offset: int) -> Sequence[WalletTransactionRecord]:
        stmt = (
            select(WalletTransaction)
            .where(WalletTransaction.wallet_id == wallet_id)
            .order_by(desc(WalletTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_transaction(row) for row in result.scalars().all()]

    async def _get_model(self, user_id: str) -> Wallet | None:
        stmt = select(Wallet).where(Wallet.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    def _to_snapshot(model: Wallet) -> WalletSnapshot:
        return WalletSnapshot(
            id=model.id,
            user_id=model.user_id,
            balance_cents=model.balance_cents,
            currency=model.currency,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_transaction(model: WalletTransaction) -> WalletTransactionRecord:
        return WalletTransactionRecord(
            id=model.id,
            wallet_id=model.wallet_id,
            amount_cents=model.amount_cents,
            type=TransactionType(model.type),
            description=model.description,
            created_at=model.created_at,
        )
