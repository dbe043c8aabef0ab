"""ORM Models — SQLAlchemy declarative models for all persisted tables.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all or alembic runs
"""

from cowchat.models.cow import CowRow  # noqa: F401
from cowchat.models.chat_session import ChatSessionRow  # noqa: F401
