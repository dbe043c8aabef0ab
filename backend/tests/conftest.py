"""Root conftest — shared test configuration."""

import os

# Tests never touch the developer's cowchat.db
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
