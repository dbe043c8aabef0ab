"""Initial schema — cows, chat_sessions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cows",
        sa.Column("cow_name", sa.String(50), primary_key=True),
        sa.Column("cow_id", sa.Integer, nullable=False, unique=True),
        sa.Column("cow_color", sa.String(30), nullable=False),
        sa.Column("cow_age", sa.Integer, nullable=False),
        sa.Column("cow_weight", sa.Integer, nullable=False),
    )

    op.create_table(
        "chat_sessions",
        sa.Column("chat_session_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("cow_name", sa.String(50), nullable=False),
        sa.Column("duration_seconds", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_chat_sessions_cow_name", "chat_sessions", ["cow_name"])


def downgrade() -> None:
    op.drop_index("ix_chat_sessions_cow_name", table_name="chat_sessions")
    op.drop_table("chat_sessions")
    op.drop_table("cows")
