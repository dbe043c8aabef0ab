"""Settings — defaults and database URL normalization."""

from cowchat.config import Settings


def test_postgres_url_gets_async_driver():
    s = Settings(database_url="postgresql://cow:moo@db:5432/meadow")
    assert s.database_url == "postgresql+asyncpg://cow:moo@db:5432/meadow"


def test_sqlite_url_untouched():
    s = Settings(database_url="sqlite+aiosqlite:///./x.db")
    assert s.database_url == "sqlite+aiosqlite:///./x.db"


def test_client_timeout_defaults_to_two_intervals():
    s = Settings()
    assert s.chat_client_timeout_seconds == 2 * s.chat_heartbeat_interval_seconds


def test_pool_defaults():
    s = Settings()
    assert s.database_pool_size == 5
    assert s.database_max_overflow == 0
    assert s.port == 3000
