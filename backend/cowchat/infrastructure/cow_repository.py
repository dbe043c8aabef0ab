"""Cow Repository — SQLAlchemy implementation of the CowRepository protocol.

Invariants:
    - One repository wraps one AsyncSession (one pooled connection while in use)
    - Reads raise QueryFailedError, writes raise WriteFailedError, pool exhaustion
      raises ServiceUnavailableError — raw SQLAlchemy errors never escape
    - insert_cows commits the whole batch or nothing
    - Aggregates that return no row are invariant violations (QueryFailedError)

Design Decisions:
    - Only the batch insert is guaranteed transactional: SQLite issues no BEGIN for
      plain SELECTs, so an allocation's reads can go stale before its insert runs;
      the cows primary key / unique cow_id reject the stale batch at commit
    - open_cow_repository gives short-lived scopes to code that must not pin a
      connection for long (chat sessions)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from cowchat.core.domain_types import ChatSessionRecord, Cow, CowId, CowName
from cowchat.core.errors import (
    QueryFailedError, ServiceUnavailableError, WriteFailedError,
)
from cowchat.infrastructure.database import get_db_manager
from cowchat.models.chat_session import ChatSessionRow
from cowchat.models.cow import CowRow

logger = logging.getLogger(__name__)


class SqlCowRepository:
    """Cow and chat-session persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self) -> int:
        async with self._reading("count"):
            result = await self.db.execute(
                select(func.count()).select_from(CowRow),
            )
            row = result.first()
        if row is None:
            logger.error("COUNT returned no rows!")
            raise QueryFailedError("count")
        return int(row[0])

    async def list_cows(self) -> list[Cow]:
        async with self._reading("list_cows"):
            result = await self.db.execute(
                select(CowRow).order_by(CowRow.cow_id),
            )
            rows = result.scalars().all()
        return [row.to_domain() for row in rows]

    async def exists(self, name: str, case_insensitive: bool = False) -> bool:
        if case_insensitive:
            condition = func.lower(CowRow.cow_name) == name.lower()
        else:
            condition = CowRow.cow_name == name
        async with self._reading("exists"):
            result = await self.db.execute(
                select(func.count()).select_from(CowRow).where(condition),
            )
            found = result.scalar()
        return bool(found)

    async def used_names(self) -> set[CowName]:
        async with self._reading("used_names"):
            result = await self.db.execute(select(CowRow.cow_name).distinct())
            names = result.scalars().all()
        return {CowName(n) for n in names}

    async def max_id(self) -> CowId:
        async with self._reading("max_id"):
            result = await self.db.execute(
                select(func.coalesce(func.max(CowRow.cow_id), 0)),
            )
            row = result.first()
        if row is None:
            logger.error("MAX(cow_id) returned no rows!")
            raise QueryFailedError("max_id")
        return CowId(int(row[0]))

    async def insert_cows(self, cows: list[Cow]) -> None:
        """Insert the batch in one transaction."""
        async with self._writing("cows"):
            self.db.add_all([CowRow.from_domain(c) for c in cows])
            await self.db.commit()

    async def insert_chat_session(self, record: ChatSessionRecord) -> None:
        async with self._writing("chat session"):
            self.db.add(ChatSessionRow(
                cow_name=record.cow_name,
                duration_seconds=record.duration_seconds,
            ))
            await self.db.commit()

    @asynccontextmanager
    async def _reading(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except PoolTimeoutError as e:
            logger.error(f"DB pool exhausted during {operation}: {e}")
            raise ServiceUnavailableError("connection pool exhausted") from e
        except SQLAlchemyError as e:
            logger.error(f"DB query {operation} failed: {e}")
            raise QueryFailedError(operation) from e

    @asynccontextmanager
    async def _writing(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except PoolTimeoutError as e:
            logger.error(f"DB pool exhausted during {operation} write: {e}")
            raise ServiceUnavailableError("connection pool exhausted") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not write {operation} to database: {e}")
            raise WriteFailedError(operation) from e


@asynccontextmanager
async def open_cow_repository() -> AsyncGenerator[SqlCowRepository, None]:
    """Short-lived repository scope on its own pooled session."""
    async with get_db_manager().session() as session:
        yield SqlCowRepository(session)
