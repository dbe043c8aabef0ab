"""API Dependencies — FastAPI providers for repositories and services.

Invariants:
    - Request-scoped routes get one repository on one pooled session (released after response)
    - Long-lived routes (WebSocket chat) get a RepositoryScope, never a pinned session

Design Decisions:
    - Providers are plain functions so tests swap them via app.dependency_overrides
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cowchat.core.repository_protocols import CowRepository, RepositoryScope
from cowchat.infrastructure.cow_repository import SqlCowRepository, open_cow_repository
from cowchat.infrastructure.database import get_db
from cowchat.services.cow_allocator import CowAllocator


def get_cow_repository(db: AsyncSession = Depends(get_db)) -> CowRepository:
    return SqlCowRepository(db)


def get_cow_allocator(
    repo: CowRepository = Depends(get_cow_repository),
) -> CowAllocator:
    return CowAllocator(repo)


def get_repository_scope() -> RepositoryScope:
    return open_cow_repository
