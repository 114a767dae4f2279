"""Wallet recharge endpoints for passengers and administrators."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.core.security import get_current_admin, get_current_user
from easyride.interfaces.http.deps import get_db_session, get_recharge_service, get_wallet_service
from easyride.modules.recharges import (
    DuplicateTransactionError,
    RechargeAlreadyProcessedError,
    RechargeDecision,
    RechargeNotFoundError,
    RechargeRequest,
    RechargeRequestWithUser,
    RechargeService,
    RechargeValidationError,
)
from easyride.modules.wallets import WalletService
from easyride.schemas import (
    CurrentUser,
    RechargeActionResponse,
    RechargeRejectRequest,
    RechargeRequestResponse,
    RechargeRequestWithUserResponse,
    RechargeSubmitRequest,
    RequesterResponse,
    WalletBalanceResponse,
    WalletTransactionListResponse,
    WalletTransactionResponse,
)

router = APIRouter()


@router.post(
    "/request",
    response_model=RechargeRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a wallet recharge request",
)
async def submit_request(
    payload: Optional[RechargeSubmitRequest] = None,
    user: CurrentUser = Depends(get_current_user),
    service: RechargeService = Depends(get_recharge_service),
) -> RechargeRequestResponse:
    payload = payload or RechargeSubmitRequest()
    try:
        request = await service.submit(
            user_id=user.id,
            amount=payload.amount,
            payment_method=payload.payment_method,
            phone_number=payload.phone_number,
            transaction_id=payload.transaction_id,
        )
    except RechargeValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except DuplicateTransactionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This transaction ID has already been used",
        ) from exc
    return _request_to_response(request)


@router.get("/my-requests", response_model=list[RechargeRequestResponse], summary="List own recharge requests")
async def my_requests(
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    service: RechargeService = Depends(get_recharge_service),
) -> list[RechargeRequestResponse]:
    requests = await service.list_for_user(user.id, limit=limit, offset=offset)
    return [_request_to_response(request) for request in requests]


@router.get("/all", response_model=list[RechargeRequestWithUserResponse], summary="List all recharge requests")
async def all_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    _: CurrentUser = Depends(get_current_admin),
    service: RechargeService = Depends(get_recharge_service),
) -> list[RechargeRequestWithUserResponse]:
    try:
        rows = await service.list_all(status_filter, limit=limit, offset=offset)
    except RechargeValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return [_enriched_to_response(row) for row in rows]


@router.get(
    "/requests/{request_id}",
    response_model=RechargeRequestWithUserResponse,
    summary="Get a single recharge request",
)
async def get_request(
    request_id: str,
    _: CurrentUser = Depends(get_current_admin),
    service: RechargeService = Depends(get_recharge_service),
) -> RechargeRequestWithUserResponse:
    try:
        row = await service.get_request(request_id)
    except RechargeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recharge request not found") from exc
    return _enriched_to_response(row)


@router.post("/approve/{request_id}", response_model=RechargeActionResponse, summary="Approve a recharge request")
async def approve_request(
    request_id: str,
    admin: CurrentUser = Depends(get_current_admin),
    service: RechargeService = Depends(get_recharge_service),
) -> RechargeActionResponse:
    try:
        decision = await service.approve(request_id, admin.id)
    except RechargeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recharge request not found") from exc
    except RechargeAlreadyProcessedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _decision_to_response(decision)


@router.post("/reject/{request_id}", response_model=RechargeActionResponse, summary="Reject a recharge request")
async def reject_request(
    request_id: str,
    payload: Optional[RechargeRejectRequest] = None,
    admin: CurrentUser = Depends(get_current_admin),
    service: RechargeService = Depends(get_recharge_service),
) -> RechargeActionResponse:
    reason = payload.reason if payload else None
    try:
        decision = await service.reject(request_id, admin.id, reason)
    except RechargeValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except RechargeNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recharge request not found") from exc
    except RechargeAlreadyProcessedError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _decision_to_response(decision)


@router.get("/wallet/balance", response_model=WalletBalanceResponse, summary="Get wallet balance")
async def wallet_balance(
    user: CurrentUser = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service),
    db: AsyncSession = Depends(get_db_session),
) -> WalletBalanceResponse:
    wallet = await wallet_service.ensure_wallet(user.id)
    await db.commit()
    return WalletBalanceResponse(balance=wallet.balance, currency=wallet.currency)


@router.get(
    "/wallet/transactions",
    response_model=WalletTransactionListResponse,
    summary="List wallet ledger entries",
)
async def wallet_transactions(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    wallet_service: WalletService = Depends(get_wallet_service),
) -> WalletTransactionListResponse:
    records = await wallet_service.list_transactions(user.id, limit, offset)
    return WalletTransactionListResponse(
        transactions=[
            WalletTransactionResponse(
                id=record.id,
                wallet_id=record.wallet_id,
                amount=record.amount,
                type=record.type.value,
                description=record.description,
                created_at=record.created_at,
            )
            for record in records
        ]
    )


def _request_to_response(request: RechargeRequest) -> RechargeRequestResponse:
    return RechargeRequestResponse(
        id=request.id,
        user_id=request.user_id,
        amount=request.amount,
        payment_method=request.payment_method.value,
        phone_number=request.phone_number,
        transaction_id=request.transaction_id,
        status=request.status.value,
        rejection_reason=request.rejection_reason,
        processed_by=request.processed_by,
        processed_at=request.processed_at,
        created_at=request.created_at,
    )


def _enriched_to_response(row: RechargeRequestWithUser) -> RechargeRequestWithUserResponse:
    base = _request_to_response(row.request)
    return RechargeRequestWithUserResponse(
        **base.model_dump(),
        user=RequesterResponse(full_name=row.user.full_name, phone_number=row.user.phone_number),
    )


def _decision_to_response(decision: RechargeDecision) -> RechargeActionResponse:
    return RechargeActionResponse(
        message=decision.message,
        request=_request_to_response(decision.request),
        balance=decision.balance,
    )
