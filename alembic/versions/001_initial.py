"""Initial tables: users, stats.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_user_id"), "users", ["user_id"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "stats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("stat_id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("date", sa.String(32), nullable=False),
        sa.Column("images_processed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("resize_operations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("bg_removal_operations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("face_crop_operations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("process_time", sa.Float(), nullable=False, server_default="0"),
        sa.Column("sync_timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_stats_stat_id"), "stats", ["stat_id"], unique=True)
    op.create_index(op.f("ix_stats_user_id"), "stats", ["user_id"], unique=False)
    op.create_index(op.f("ix_stats_date"), "stats", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_stats_date"), table_name="stats")
    op.drop_index(op.f("ix_stats_user_id"), table_name="stats")
    op.drop_index(op.f("ix_stats_stat_id"), table_name="stats")
    op.drop_table("stats")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_index(op.f("ix_users_user_id"), table_name="users")
    op.drop_table("users")
