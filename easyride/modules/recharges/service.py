"""Recharge request intake, listing and the admin approval workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.modules.common.unit_of_work import UnitOfWork
from easyride.modules.profiles import Profile, ProfileService
from easyride.modules.wallets import TransactionType, WalletService

from .exceptions import DuplicateTransactionError, RechargeAlreadyProcessedError, RechargeNotFoundError
from .models import (
    RechargeDecision,
    RechargeRequest,
    RechargeRequestWithUser,
    RechargeStatus,
    RequesterInfo,
)
from .repository import RechargeRequestRepository
from .validation import parse_status_filter, validate_rejection_reason, validate_submission

logger = logging.getLogger(__name__)

ALREADY_PROCESSED = "Request has already been processed"


@dataclass(slots=True)
class RechargeService:
    requests: RechargeRequestRepository
    wallets: WalletService
    profiles: ProfileService
    unit_of_work: UnitOfWork

    @classmethod
    def with_session(cls, session: AsyncSession, currency: str = "BDT") -> "RechargeService":
        from easyride.infrastructure.database.repositories.recharge_repository import SqlRechargeRequestRepository

        return cls(
            requests=SqlRechargeRequestRepository(session),
            wallets=WalletService.with_session(session, currency),
            profiles=ProfileService.with_session(session),
            unit_of_work=session,
        )

    async def submit(
        self,
        *,
        user_id: str,
        amount: Any,
        payment_method: Any,
        phone_number: Any,
        transaction_id: Any,
    ) -> RechargeRequest:
        submission = validate_submission(
            user_id=user_id,
            amount=amount,
            payment_method=payment_method,
            phone_number=phone_number,
            transaction_id=transaction_id,
        )
        try:
            request = await self.requests.create(submission)
        except DuplicateTransactionError:
            await self.unit_of_work.rollback()
            logger.warning(
                "Duplicate recharge transaction id %s from user %s",
                submission.transaction_id,
                user_id,
            )
            raise
        await self.unit_of_work.commit()
        logger.info(
            "Recharge request %s submitted by %s (%s %s)",
            request.id,
            user_id,
            request.payment_method.value,
            request.amount,
        )
        return request

    async def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[RechargeRequest]:
        rows = await self.requests.list_by_user(user_id, limit=limit, offset=offset)
        return list(rows)

    async def list_all(
        self,
        status: str | None = None,
        *,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[RechargeRequestWithUser]:
        status_filter = parse_status_filter(status)
        rows = await self.requests.list_all(status=status_filter, limit=limit, offset=offset)
        return await self._with_users(rows)

    async def get_request(self, request_id: str) -> RechargeRequestWithUser:
        request = await self._require(request_id)
        enriched = await self._with_users([request])
        return enriched[0]

    async def approve(self, request_id: str, admin_id: str) -> RechargeDecision:
        request = await self._require(request_id)
        self._ensure_pending(request)

        # status transition, credit and ledger entry commit or roll back together
        try:
            approved = await self._transition(request, RechargeStatus.APPROVED, admin_id)
            wallet = await self.wallets.credit_amount(
                user_id=approved.user_id,
                amount_cents=approved.amount_cents,
                type=TransactionType.RECHARGE,
                description=(
                    f"Recharge approved - {approved.payment_method.value} - TxID: {approved.transaction_id}"
                ),
            )
        except Exception:
            await self.unit_of_work.rollback()
            raise
        await self.unit_of_work.commit()

        logger.info(
            "Recharge request %s approved by %s, credited %s to wallet %s",
            request_id,
            admin_id,
            approved.amount,
            wallet.id,
        )
        return RechargeDecision(
            request=approved,
            message="Recharge request approved successfully",
            balance=wallet.balance,
        )

    async def reject(self, request_id: str, admin_id: str, reason: str | None) -> RechargeDecision:
        reason = validate_rejection_reason(reason)
        request = await self._require(request_id)
        self._ensure_pending(request)

        try:
            rejected = await self._transition(request, RechargeStatus.REJECTED, admin_id, rejection_reason=reason)
        except Exception:
            await self.unit_of_work.rollback()
            raise
        await self.unit_of_work.commit()

        logger.info("Recharge request %s rejected by %s: %s", request_id, admin_id, reason)
        return RechargeDecision(request=rejected, message="Recharge request rejected successfully")

    async def _require(self, request_id: str) -> RechargeRequest:
        request = await self.requests.get(request_id)
        if request is None:
            raise RechargeNotFoundError(request_id)
        return request

    @staticmethod
    def _ensure_pending(request: RechargeRequest) -> None:
        if not request.is_pending:
            logger.warning("Recharge request %s already %s", request.id, request.status.value)
            raise RechargeAlreadyProcessedError(ALREADY_PROCESSED)

    async def _transition(
        self,
        request: RechargeRequest,
        target: RechargeStatus,
        admin_id: str,
        *,
        rejection_reason: str | None = None,
    ) -> RechargeRequest:
        if target is RechargeStatus.APPROVED:
            rejection_reason = None
        elif target is RechargeStatus.REJECTED:
            if rejection_reason is None:
                raise ValueError("rejection requires a reason")
        else:
            raise ValueError(f"cannot transition a request to {target.value}")

        updated = await self.requests.transition(
            request.id,
            status=target,
            processed_by=admin_id,
            processed_at=datetime.now(timezone.utc),
            rejection_reason=rejection_reason,
        )
        if updated is None:
            # another admin action won the conditional update
            logger.warning("Recharge request %s was processed concurrently", request.id)
            raise RechargeAlreadyProcessedError(ALREADY_PROCESSED)
        return updated

    async def _with_users(self, requests: Iterable[RechargeRequest]) -> list[RechargeRequestWithUser]:
        requests = list(requests)
        try:
            profiles = await self.profiles.lookup_many(request.user_id for request in requests)
        except SQLAlchemyError as exc:
            logger.warning("Profile lookup failed, using placeholders: %s", exc)
            profiles = {}
        return [
            RechargeRequestWithUser(request=request, user=_requester_info(profiles.get(request.user_id)))
            for request in requests
        ]


def _requester_info(profile: Profile | None) -> RequesterInfo:
    if profile is None:
        return RequesterInfo()
    return RequesterInfo(
        full_name=profile.full_name or profile.email or "Unknown",
        phone_number=profile.phone_number or "N/A",
    )
