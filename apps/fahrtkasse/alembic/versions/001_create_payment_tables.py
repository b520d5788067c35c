"""Create participant and payment tables for fahrtkasse."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "001_create_payment_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Apply schema upgrades."""
    op.create_table(
        "participants",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("participant_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("paid_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_amount_per_person", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(
            ["participant_id"],
            ["participants.id"],
            name="fk_payments_participant_id",
        ),
        sa.UniqueConstraint("participant_id", name="uq_payments_participant_id"),
        sa.CheckConstraint(
            "paid_amount >= 0", name="ck_payments_paid_amount_non_negative"
        ),
        sa.CheckConstraint(
            "total_amount_per_person >= 0",
            name="ck_payments_total_amount_per_person_non_negative",
        ),
    )
    op.create_index("ix_payments_position", "payments", ["position"], unique=False)


def downgrade() -> None:
    """Revert schema upgrades."""
    op.drop_index("ix_payments_position", table_name="payments")
    op.drop_table("payments")
    op.drop_table("participants")
