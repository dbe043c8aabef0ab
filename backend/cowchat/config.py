"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - chat_client_timeout_seconds defaults to twice the heartbeat interval

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults work out of the box: local SQLite file, localhost:3000, pool of 5
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./cowchat.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 0
    database_pool_timeout: float = 5.0
    database_create_schema: bool = True

    # Server
    host: str = "localhost"
    port: int = 3000
    workers: int = 1

    # Chat sessions
    chat_heartbeat_interval_seconds: float = 5.0
    chat_client_timeout_seconds: float = 10.0

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "DEBUG"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
