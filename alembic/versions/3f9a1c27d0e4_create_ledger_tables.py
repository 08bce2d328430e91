"""create narrative record, subscription and ledger balance tables

Revision ID: 3f9a1c27d0e4
Revises:
Create Date: 2026-10-19 10:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "3f9a1c27d0e4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "narrative_records",
        sa.Column("handle", sa.String(64), primary_key=True, comment="Storage slot key of the record."),
        sa.Column("score", sa.SmallInteger(), nullable=False, comment="Scaled probability, 0-100."),
        sa.Column("platform", sa.String(20), nullable=False, comment="Source platform name."),
        sa.Column("alternative", sa.String(20), nullable=False, comment="Alternative platform name."),
        sa.Column("timestamp", sa.BigInteger(), nullable=False, comment="Caller-supplied time value."),
        sa.Column("author_identity", sa.String(64), nullable=False, comment="Identity that authored the record."),
        sa.CheckConstraint("score >= 0 AND score <= 100", name="ck_narrative_record_score_range"),
    )

    op.create_table(
        "subscriptions",
        sa.Column("handle", sa.String(64), primary_key=True, comment="Storage slot key of the subscription."),
        sa.Column("subscriber_identity", sa.String(64), nullable=False, comment="Identity of the paying party."),
        sa.Column("start_time", sa.BigInteger(), nullable=False, comment="Network time at creation."),
        sa.Column("end_time", sa.BigInteger(), nullable=False, comment="Advisory expiry time."),
        sa.Column("active", sa.Boolean(), nullable=False, comment="Cleared by cancellation."),
        sa.CheckConstraint("end_time > start_time", name="ck_subscription_window"),
    )

    op.create_table(
        "ledger_balances",
        sa.Column("identity", sa.String(64), primary_key=True, comment="Owning identity."),
        sa.Column("balance", sa.BigInteger(), nullable=False, comment="Native units held."),
        sa.CheckConstraint("balance >= 0", name="ck_ledger_balance_non_negative"),
    )


def downgrade() -> None:
    op.drop_table("ledger_balances")
    op.drop_table("subscriptions")
    op.drop_table("narrative_records")
