"""Service test fixtures — async DB, FastAPI test clients, in-memory repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so short-lived repository scopes hit the test DB
    - fake_repo fixtures never touch SQLAlchemy

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the same
      PRIMARY KEY / UNIQUE constraints the allocator relies on
    - db_manager patched via __new__: skips engine creation with pool arguments
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from cowchat.api.dependencies import get_cow_repository
from cowchat.db.base import Base
from cowchat.infrastructure.database import get_db, DatabaseSessionManager
from cowchat.models.cow import CowRow
import cowchat.infrastructure.database as db_module
from cowchat.main import app

from tests.services.fakes import FakeCowRepository, make_test_cow


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine, installed as db_manager."""
    original_manager = db_module.db_manager
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    db_module.db_manager = manager
    yield manager
    db_module.db_manager = original_manager


@pytest.fixture
async def client(fake_manager, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def fake_repo():
    return FakeCowRepository()


@pytest.fixture
async def fake_client(fake_repo):
    """FastAPI test client whose routes talk to the in-memory fake repository."""
    app.dependency_overrides[get_cow_repository] = lambda: fake_repo

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_cows(test_db):
    """Insert Bessie (id 1) and Daisy (id 2) into the test DB."""
    rows = [
        CowRow.from_domain(make_test_cow("Bessie", 1)),
        CowRow.from_domain(make_test_cow("Daisy", 2)),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows
