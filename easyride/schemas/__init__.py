"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from easyride.modules.profiles import Role


class TokenData(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


class RechargeSubmitRequest(BaseModel):
    """Raw submission body; field checks happen in the recharge service so they map to 400."""

    model_config = ConfigDict(populate_by_name=True)

    amount: Any = None
    payment_method: Any = Field(None, alias="paymentMethod")
    phone_number: Any = Field(None, alias="phoneNumber")
    transaction_id: Any = Field(None, alias="transactionId")


class RechargeRejectRequest(BaseModel):
    reason: Optional[str] = None


class RequesterResponse(BaseModel):
    full_name: str
    phone_number: str


class RechargeRequestResponse(BaseModel):
    id: str
    user_id: str
    amount: Decimal
    payment_method: str
    phone_number: str
    transaction_id: str
    status: str
    rejection_reason: Optional[str] = None
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class RechargeRequestWithUserResponse(RechargeRequestResponse):
    user: RequesterResponse


class RechargeActionResponse(BaseModel):
    success: bool = True
    message: str
    request: RechargeRequestResponse
    balance: Optional[Decimal] = None


class WalletBalanceResponse(BaseModel):
    balance: Decimal
    currency: str


class WalletTransactionResponse(BaseModel):
    id: str
    wallet_id: str
    amount: Decimal
    type: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class WalletTransactionListResponse(BaseModel):
    transactions: list[WalletTransactionResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
