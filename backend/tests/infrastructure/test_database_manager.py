"""Database Session Manager — SQLAlchemy error mapping and health checks.

Invariants:
    - IntegrityError → WriteFailedError, OperationalError → ServiceUnavailableError
    - Pool TimeoutError → ServiceUnavailableError, other SQLAlchemyError → QueryFailedError
    - CowChatError passes through unchanged
"""

import pytest
from sqlalchemy.exc import (
    IntegrityError, OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError,
)

from cowchat.core.errors import (
    CapacityExhaustedError, QueryFailedError, ServiceUnavailableError, WriteFailedError,
)
from cowchat.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await mgr.create_schema()
    yield mgr
    await mgr.dispose()


@pytest.mark.parametrize("raised, expected", [
    (IntegrityError("INSERT", {}, Exception("UNIQUE")), WriteFailedError),
    (OperationalError("SELECT", {}, Exception("locked")), ServiceUnavailableError),
    (PoolTimeoutError("QueuePool limit reached"), ServiceUnavailableError),
    (SQLAlchemyError("boom"), QueryFailedError),
])
async def test_sqlalchemy_errors_are_mapped(manager, raised, expected):
    with pytest.raises(expected):
        async with manager.session():
            raise raised


async def test_domain_errors_pass_through(manager):
    with pytest.raises(CapacityExhaustedError):
        async with manager.session():
            raise CapacityExhaustedError()


async def test_health_check_ok(manager):
    assert await manager.health_check() is True


async def test_create_schema_is_idempotent(manager):
    await manager.create_schema()
    assert await manager.health_check() is True
