"""create qr_codes table

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "qr_codes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("wallet_address", sa.String(length=128), nullable=False),
        sa.Column("website_url", sa.Text(), nullable=False),
        sa.Column("website_name", sa.String(length=255), nullable=False),
        sa.Column("memo", sa.Text(), nullable=False, server_default=""),
        sa.Column("amount", sa.String(length=64), nullable=False, server_default="0"),
        sa.Column("qr_data", sa.String(length=128), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("website_url", name="uq_qr_codes_website_url"),
    )
    op.create_index("ix_qr_codes_wallet_address", "qr_codes", ["wallet_address"])


def downgrade() -> None:
    op.drop_index("ix_qr_codes_wallet_address", table_name="qr_codes")
    op.drop_table("qr_codes")
