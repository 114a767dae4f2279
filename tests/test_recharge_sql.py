"""Recharge workflow against the SQLAlchemy repositories on SQLite."""

from decimal import Decimal

import pytest
from sqlalchemy import BigInteger, func, select

from easyride.db import models
from easyride.infrastructure.database.repositories import SqlWalletRepository
from easyride.modules.recharges import (
    DuplicateTransactionError,
    RechargeAlreadyProcessedError,
    RechargeService,
    RechargeStatus,
)
from easyride.modules.wallets import WalletService

USER = "2b0c4e8e-8d6c-4bfa-9a38-5d1c0c1f0001"
ADMIN = "2b0c4e8e-8d6c-4bfa-9a38-5d1c0c1f00aa"


async def _submit(service: RechargeService, transaction_id: str = "TXN123", amount=100):
    return await service.submit(
        user_id=USER,
        amount=amount,
        payment_method="bkash",
        phone_number="01712345678",
        transaction_id=transaction_id,
    )


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_end_to_end_approval(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        request = await _submit(service)
        assert request.status is RechargeStatus.PENDING
        decision = await service.approve(request.id, ADMIN)
        assert decision.balance == Decimal("100.00")

    async with session_factory() as session:
        balance = await WalletService.with_session(session).get_balance(USER)
        assert balance == Decimal("100.00")
        entries = (await session.execute(select(models.WalletTransaction))).scalars().all()
        assert len(entries) == 1
        assert entries[0].type == "recharge"
        assert entries[0].amount_cents == 10000
        assert "TXN123" in entries[0].description
        stored = (await session.execute(select(models.RechargeRequest))).scalar_one()
        assert stored.status == "approved"
        assert stored.processed_by == ADMIN


async def test_rejection_scenario(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        request = await _submit(service)
        await service.reject(request.id, ADMIN, "Invalid transaction")

    async with session_factory() as session:
        stored = (await session.execute(select(models.RechargeRequest))).scalar_one()
        assert stored.status == "rejected"
        assert stored.rejection_reason == "Invalid transaction"
        assert await WalletService.with_session(session).get_balance(USER) == Decimal("0")


async def test_unique_constraint_surfaces_duplicate(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        await _submit(service)

    async with session_factory() as session:
        service = RechargeService.with_session(session)
        with pytest.raises(DuplicateTransactionError):
            await _submit(service, amount=250)

    async with session_factory() as session:
        assert await _count(session, models.RechargeRequest) == 1


async def test_double_approval_credits_once(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        request = await _submit(service)
        await service.approve(request.id, ADMIN)

    async with session_factory() as session:
        service = RechargeService.with_session(session)
        with pytest.raises(RechargeAlreadyProcessedError):
            await service.approve(request.id, ADMIN)

    async with session_factory() as session:
        assert await WalletService.with_session(session).get_balance(USER) == Decimal("100.00")
        assert await _count(session, models.WalletTransaction) == 1


async def test_conditional_update_refuses_processed_request(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        request = await _submit(service)
        await service.reject(request.id, ADMIN, "Invalid transaction")

    async with session_factory() as session:
        service = RechargeService.with_session(session)
        # bypass the in-memory guard and hit the storage-level condition directly
        with pytest.raises(RechargeAlreadyProcessedError):
            await service._transition(request, RechargeStatus.APPROVED, ADMIN)
        await session.rollback()

    async with session_factory() as session:
        assert await _count(session, models.Wallet) == 0


class _FailingLedgerRepository(SqlWalletRepository):
    async def add_transaction(self, **kwargs):
        raise RuntimeError("ledger write failed")


async def test_approval_is_atomic_when_ledger_write_fails(session_factory):
    async with session_factory() as session:
        request = await _submit(RechargeService.with_session(session))

    async with session_factory() as session:
        service = RechargeService.with_session(session)
        service.wallets = WalletService(_FailingLedgerRepository(session))
        with pytest.raises(RuntimeError):
            await service.approve(request.id, ADMIN)

    async with session_factory() as session:
        stored = (await session.execute(select(models.RechargeRequest))).scalar_one()
        assert stored.status == "pending"
        assert stored.processed_by is None
        assert await _count(session, models.Wallet) == 0
        assert await _count(session, models.WalletTransaction) == 0


async def test_lazy_wallet_created_once(session_factory):
    async with session_factory() as session:
        wallets = WalletService.with_session(session)
        assert await wallets.get_balance("fresh-user") == Decimal("0")
        await session.commit()
        assert await wallets.get_balance("fresh-user") == Decimal("0")
        await session.commit()

    async with session_factory() as session:
        assert await _count(session, models.Wallet) == 1


async def test_create_wallet_returns_existing_on_unique_clash(session_factory):
    async with session_factory() as session:
        repository = SqlWalletRepository(session)
        first = await repository.create_wallet("clash-user", "BDT")
        second = await repository.create_wallet("clash-user", "BDT")
        await session.commit()
        assert first.id == second.id

    async with session_factory() as session:
        assert await _count(session, models.Wallet) == 1


async def test_balance_matches_sum_over_many_approvals(session_factory):
    amounts = ["100.50", "250.25", "19.99", "0.01"]
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        for index, amount in enumerate(amounts):
            request = await _submit(service, transaction_id=f"TXN-{index}", amount=amount)
            await service.approve(request.id, ADMIN)

    async with session_factory() as session:
        balance = await WalletService.with_session(session).get_balance(USER)
        assert balance == sum((Decimal(amount) for amount in amounts), Decimal("0"))
        assert str(balance) == "370.75"


async def test_balance_can_exceed_single_request_limit(session_factory):
    assert isinstance(models.Wallet.__table__.c.balance_cents.type, BigInteger)
    assert isinstance(models.WalletTransaction.__table__.c.amount_cents.type, BigInteger)

    async with session_factory() as session:
        service = RechargeService.with_session(session)
        for txid in ("TXN-MAX-1", "TXN-MAX-2"):
            request = await _submit(service, transaction_id=txid, amount="21474836.47")
            decision = await service.approve(request.id, ADMIN)

    assert decision.balance == Decimal("42949672.94")
    async with session_factory() as session:
        wallet = (await session.execute(select(models.Wallet))).scalar_one()
        assert wallet.balance_cents == 2 * 2_147_483_647


async def test_spaced_phone_number_is_stored_normalized(session_factory):
    async with session_factory() as session:
        service = RechargeService.with_session(session)
        await service.submit(
            user_id=USER,
            amount=100,
            payment_method="nagad",
            phone_number="0 1 7 1 2 3 4 5 6 7 8",
            transaction_id="TXN-SPACED",
        )

    async with session_factory() as session:
        stored = (await session.execute(select(models.RechargeRequest))).scalar_one()
        assert stored.phone_number == "01712345678"
