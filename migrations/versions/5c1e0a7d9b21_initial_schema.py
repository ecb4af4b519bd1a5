"""initial schema

Revision ID: 5c1e0a7d9b21
Revises:
Create Date: 2026-10-19 09:12:44.318202

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d9b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.DateTime(timezone=True), nullable=True) for name in names]


def upgrade() -> None:
    """Create every table of the initial schema."""
    op.create_table(
        "user",
        sa.Column("id", sa.String(length=66), nullable=False),
        sa.Column("name", sa.String(length=30), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_picture_url", sa.Text(), nullable=False),
        sa.Column("nonce", sa.BigInteger(), nullable=False),
        sa.Column("metric", sa.JSON(), nullable=False),
        *_timestamps("created_at", "updated_at", "deleted_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "network",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("chain_id", sa.String(length=32), nullable=True),
        sa.Column("rpc_url", sa.Text(), nullable=False),
        sa.Column("explorer_url", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tag",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "post",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("platform", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_by", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("original_post_id", sa.String(length=128), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("mentions", sa.JSON(), nullable=False),
        sa.Column("metric", sa.JSON(), nullable=False),
        sa.Column("popular_count", sa.Integer(), nullable=False),
        sa.Column("experience_index", sa.JSON(), nullable=False),
        *_timestamps("published_at", "created_at", "updated_at", "deleted_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_original_post_id", "post", ["original_post_id"])
    op.create_table(
        "comment",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("section", sa.String(length=16), nullable=False),
        sa.Column("reference_id", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=32), sa.ForeignKey("post.id"), nullable=False),
        sa.Column("user_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("metric", sa.JSON(), nullable=False),
        *_timestamps("created_at", "deleted_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_comment_reference", "comment", ["user_id", "reference_id", "type", "section"]
    )
    op.create_table(
        "vote",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("reference_id", sa.String(length=32), nullable=False),
        sa.Column("post_id", sa.String(length=32), sa.ForeignKey("post.id"), nullable=False),
        sa.Column("section", sa.String(length=16), nullable=True),
        sa.Column("state", sa.Boolean(), nullable=False),
        sa.Column("user_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("to_user_id", sa.String(length=66), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "type", "reference_id", name="uq_vote_user_reference"),
    )
    op.create_index("ix_vote_reference", "vote", ["type", "reference_id"])
    op.create_table(
        "currency",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("symbol", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("decimal", sa.Integer(), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("native", sa.Boolean(), nullable=False),
        sa.Column("network_id", sa.String(length=64), sa.ForeignKey("network.id"), nullable=False),
        sa.Column("reference_id", sa.String(length=128), nullable=True),
        sa.Column("exchange_rate", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("network_id", "symbol", name="uq_currency_network_symbol"),
    )
    op.create_table(
        "user_currency",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column(
            "currency_id", sa.String(length=32), sa.ForeignKey("currency.id"), nullable=False
        ),
        sa.Column("network_id", sa.String(length=64), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "currency_id", name="uq_user_currency"),
    )
    op.create_table(
        "transaction",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("hash", sa.String(length=128), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("from", sa.String(length=66), nullable=False),
        sa.Column("to", sa.String(length=66), nullable=False),
        sa.Column(
            "currency_id", sa.String(length=32), sa.ForeignKey("currency.id"), nullable=False
        ),
        sa.Column("type", sa.String(length=16), nullable=True),
        sa.Column("reference_id", sa.String(length=32), nullable=True),
        *_timestamps("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transaction_from", "transaction", ["from"])
    op.create_index("ix_transaction_to", "transaction", ["to"])
    op.create_table(
        "wallet",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("network_id", sa.String(length=64), sa.ForeignKey("network.id"), nullable=False),
        sa.Column("user_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("primary", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "type", name="uq_wallet_user_type"),
    )
    op.create_table(
        "report",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("reference_type", sa.String(length=16), nullable=False),
        sa.Column("reference_id", sa.String(length=66), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("total_reported", sa.Integer(), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reference_type", "reference_id", name="uq_report_reference"),
    )
    op.create_table(
        "user_report",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column(
            "report_id",
            sa.String(length=32),
            sa.ForeignKey("report.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reported_by", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("reference_type", sa.String(length=16), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reported_by", "report_id", name="uq_user_report_reporter"),
    )
    op.create_index("ix_user_report_report_id", "user_report", ["report_id"])
    op.create_table(
        "friend",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("requestor_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("requestee_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        *_timestamps("created_at", "updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_friend_pair", "friend", ["requestor_id", "requestee_id"])
    op.create_table(
        "experience",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        *_timestamps("created_at", "deleted_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "experience_post",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column(
            "experience_id",
            sa.String(length=32),
            sa.ForeignKey("experience.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "post_id",
            sa.String(length=32),
            sa.ForeignKey("post.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("experience_id", "post_id", name="uq_experience_post"),
    )
    op.create_table(
        "user_social_media",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=66), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("people_id", sa.String(length=128), nullable=False),
        sa.Column("platform", sa.String(length=32), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False),
        sa.Column("primary", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("platform", "people_id", name="uq_social_media_people"),
    )
    op.create_table(
        "notification",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("from_user_id", sa.String(length=66), nullable=True),
        sa.Column("to_user_id", sa.String(length=66), nullable=False),
        sa.Column("reference_id", sa.String(length=66), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False),
        *_timestamps("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notification_to_user_id", "notification", ["to_user_id"])
    op.create_table(
        "activity_log",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("user_id", sa.String(length=66), nullable=False),
        sa.Column("reference_type", sa.String(length=16), nullable=False),
        sa.Column("reference_id", sa.String(length=66), nullable=True),
        *_timestamps("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_log_user_id", "activity_log", ["user_id"])


def downgrade() -> None:
    """Drop every table, dependents first."""
    for table in (
        "activity_log",
        "notification",
        "user_social_media",
        "experience_post",
        "experience",
        "friend",
        "user_report",
        "report",
        "wallet",
        "transaction",
        "user_currency",
        "currency",
        "vote",
        "comment",
        "post",
        "tag",
        "network",
        "user",
    ):
        op.drop_table(table)
