"""CowChat API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CowChatError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema created on startup when database_create_schema is set (local SQLite);
      alembic migrations are the path for managed databases
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cowchat.api.error_handlers import register_error_handlers
from cowchat.api.routes import cow_chat, cows, health
from cowchat.config import get_settings
from cowchat.infrastructure.database import init_db
from cowchat.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("CowChat API started")
    yield
    await manager.dispose()
    logger.info("CowChat API shutting down")


app = FastAPI(title="CowChat API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(cows.router)
app.include_router(cow_chat.router)

register_error_handlers(app)
