"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from easyride.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    """User profile rows maintained by the identity provider."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    full_name = Column(String(150))
    phone_number = Column(String(20))
    email = Column(String(255))
    role = Column(String(20), default="passenger")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class RechargeRequest(Base):
    __tablename__ = "recharge_requests"
    __table_args__ = (CheckConstraint("amount_cents > 0", name="ck_recharge_requests_amount_positive"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)
    payment_method = Column(String(20), nullable=False)  # bkash, nagad, rocket
    phone_number = Column(String(20), nullable=False)
    transaction_id = Column(String(100), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, approved, rejected
    rejection_reason = Column(Text)
    processed_by = Column(String(36))
    processed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)


class Wallet(Base):
    __tablename__ = "wallets"
    __table_args__ = (CheckConstraint("balance_cents >= 0", name="ck_wallets_balance_non_negative"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, unique=True)
    balance_cents = Column(BigInteger, nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="BDT")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    transactions = relationship("WalletTransaction", back_populates="wallet", cascade="all, delete-orphan")


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    wallet_id = Column(String(36), ForeignKey("wallets.id"), nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    type = Column(String(20), nullable=False, default="recharge")
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    wallet = relationship("Wallet", back_populates="transactions")
