"""create profiles, recharge requests, wallets and wallet transactions

Revision ID: 5e1f0c2a9b7d
Revises: 
Create Date: 2026-10-19 10:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5e1f0c2a9b7d"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("full_name", sa.String(length=150)),
        sa.Column("phone_number", sa.String(length=20)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("role", sa.String(length=20), server_default="passenger"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "recharge_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("payment_method", sa.String(length=20), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=False),
        sa.Column("transaction_id", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("rejection_reason", sa.Text()),
        sa.Column("processed_by", sa.String(length=36)),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("amount_cents > 0", name="ck_recharge_requests_amount_positive"),
        sa.UniqueConstraint("transaction_id", name="uq_recharge_requests_transaction_id"),
    )
    op.create_index("ix_recharge_requests_user_id", "recharge_requests", ["user_id"])
    op.create_index("ix_recharge_requests_status", "recharge_requests", ["status"])
    op.create_index("ix_recharge_requests_created_at", "recharge_requests", ["created_at"])

    op.create_table(
        "wallets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("balance_cents", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="BDT"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("balance_cents >= 0", name="ck_wallets_balance_non_negative"),
        sa.UniqueConstraint("user_id", name="uq_wallets_user_id"),
    )

    op.create_table(
        "wallet_transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("amount_cents", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="recharge"),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_wallet_transactions_wallet_id", "wallet_transactions", ["wallet_id"])


def downgrade() -> None:
    op.drop_index("ix_wallet_transactions_wallet_id", table_name="wallet_transactions")
    op.drop_table("wallet_transactions")
    op.drop_table("wallets")
    op.drop_index("ix_recharge_requests_created_at", table_name="recharge_requests")
    op.drop_index("ix_recharge_requests_status", table_name="recharge_requests")
    op.drop_index("ix_recharge_requests_user_id", table_name="recharge_requests")
    op.drop_table("recharge_requests")
    op.drop_table("profiles")
