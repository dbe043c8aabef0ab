"""ChatSession ORM — logging table for finished cow chats.

Invariants:
    - One row per chat session, written once when the session closes
    - cow_name references cows.cow_name by convention only (no FK constraint)

Design Decisions:
    - Logging table, not enforcement: nothing reads it back on the hot path
    - No FK: a failed or late record must never block connection teardown
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cowchat.db.base import Base


class ChatSessionRow(Base):
    """Duration log entry for one chat with a cow."""
    __tablename__ = "chat_sessions"

    chat_session_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    cow_name: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True,
    )
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
