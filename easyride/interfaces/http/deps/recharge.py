"""Recharge and wallet dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from easyride.core.config import get_settings
from easyride.modules.recharges import RechargeService
from easyride.modules.wallets import WalletService

from .database import get_db_session


def get_recharge_service(db: AsyncSession = Depends(get_db_session)) -> RechargeService:
    return RechargeService.with_session(db, get_settings().wallet_currency)


def get_wallet_service(db: AsyncSession = Depends(get_db_session)) -> WalletService:
    return WalletService.with_session(db, get_settings().wallet_currency)


__all__ = [
    "get_recharge_service",
    "get_wallet_service",
]
