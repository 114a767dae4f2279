"""SQLAlchemy implementation for recharge request repository"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.db.models import RechargeRequest as RechargeRequestModel
from easyride.modules.recharges.exceptions import DuplicateTransactionError
from easyride.modules.recharges.models import (
    PaymentMethod,
    RechargeRequest,
    RechargeStatus,
    RechargeSubmission,
)


class SqlRechargeRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, submission: RechargeSubmission) -> RechargeRequest:
        model = RechargeRequestModel(
            user_id=submission.user_id,
            amount_cents=submission.amount_cents,
            payment_method=submission.payment_method.value,
            phone_number=submission.phone_number,
            transaction_id=submission.transaction_id,
            status=RechargeStatus.PENDING.value,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(model)
                await self.session.flush()
        except IntegrityError as exc:
            if await self._transaction_id_exists(submission.transaction_id):
                raise DuplicateTransactionError(submission.transaction_id) from exc
            raise
        await self.session.refresh(model)
        return self._to_domain(model)

    async def get(self, request_id: str) -> RechargeRequest | None:
        stmt = select(RechargeRequestModel).where(RechargeRequestModel.id == request_id)
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def list_by_user(
        self,
        user_id: str,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[RechargeRequest]:
        stmt = (
            select(RechargeRequestModel)
            .where(RechargeRequestModel.user_id == user_id)
            .order_by(desc(RechargeRequestModel.created_at))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_all(
        self,
        *,
        status: RechargeStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[RechargeRequest]:
        stmt = select(RechargeRequestModel)
        if status is not None:
            stmt = stmt.where(RechargeRequestModel.status == status.value)
        stmt = stmt.order_by(desc(RechargeRequestModel.created_at)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def transition(
        self,
        request_id: str,
        *,
        status: RechargeStatus,
        processed_by: str,
        processed_at: datetime,
        rejection_reason: str | None = None,
    ) -> RechargeRequest | None:
        stmt = (
            update(RechargeRequestModel)
            .where(
                RechargeRequestModel.id == request_id,
                RechargeRequestModel.status == RechargeStatus.PENDING.value,
            )
            .values(
                status=status.value,
                processed_by=processed_by,
                processed_at=processed_at,
                rejection_reason=rejection_reason,
            )
            .execution_options(synchronize_session="fetch")
            .returning(RechargeRequestModel)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def _transaction_id_exists(self, transaction_id: str) -> bool:
        stmt = select(RechargeRequestModel.id).where(RechargeRequestModel.transaction_id == transaction_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    @staticmethod
    def _to_domain(model: RechargeRequestModel) -> RechargeRequest:
        return RechargeRequest(
            id=model.id,
            user_id=model.user_id,
            amount_cents=model.amount_cents,
            payment_method=PaymentMethod(model.payment_method),
            phone_number=model.phone_number,
            transaction_id=model.transaction_id,
            status=RechargeStatus(model.status),
            created_at=model.created_at,
            rejection_reason=model.rejection_reason,
            processed_by=model.processed_by,
            processed_at=model.processed_at,
        )
