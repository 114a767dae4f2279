"""Repository protocol for recharge requests."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import RechargeRequest, RechargeStatus, RechargeSubmission


class RechargeRequestRepository(Protocol):
    """Persistence for recharge requests.

    ``create`` must raise :class:`~.exceptions.DuplicateTransactionError`
    when ``transaction_id`` is already stored, and ``transition`` must be a
    single conditional write that only succeeds while the stored status is
    still ``pending``.
    """

    async def create(self, submission: RechargeSubmission) -> RechargeRequest:
        ...

    async def get(self, request_id: str) -> RechargeRequest | None:
        ...

    async def list_by_user(
        self,
        user_id: str,
        *,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[RechargeRequest]:
        ...

    async def list_all(
        self,
        *,
        status: RechargeStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[RechargeRequest]:
        ...

    async def transition(
        self,
        request_id: str,
        *,
        status: RechargeStatus,
        processed_by: str,
        processed_at: datetime,
        rejection_reason: str | None = None,
    ) -> RechargeRequest | None:
        """Move a pending request to ``status``; ``None`` if it was not pending."""
        ...
