"""Cow Chat — WebSocket endpoint hosting one timed chat session per connection.

Invariants:
    - The cow must exist (case-insensitive) before accept(); otherwise the handshake
      is refused with close code 1008 and no ChatSession is created
    - The path name is normalized to its catalog spelling before anything else
    - Existence check and session record each use their own short repository scope

Design Decisions:
    - Handshake refusal via close-before-accept: ASGI servers answer it with HTTP 403
    - Storage failure during the check refuses with 1011 (internal error)
"""

import logging

from fastapi import APIRouter, Depends, WebSocket

from cowchat.api.dependencies import get_repository_scope
from cowchat.config import Settings, get_settings
from cowchat.core.catalogs import normalize_cow_name
from cowchat.core.chat_session import CLOSE_POLICY_VIOLATION
from cowchat.core.errors import CowChatError, EntityNotFoundError
from cowchat.core.repository_protocols import RepositoryScope
from cowchat.services.chat_runner import ChatRunner
from cowchat.services.cow_allocator import CowAllocator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cows", tags=["chat"])

CLOSE_INTERNAL_ERROR = 1011


async def _cow_exists(open_repository: RepositoryScope, name: str) -> bool:
    async with open_repository() as repo:
        return await CowAllocator(repo).exists(name, case_insensitive=True)


@router.websocket("/chat/{cow_name}")
async def cow_chat(
    websocket: WebSocket,
    cow_name: str,
    open_repository: RepositoryScope = Depends(get_repository_scope),
    settings: Settings = Depends(get_settings),
):
    """Chat with one cow until the client leaves or misses its heartbeat."""
    name = normalize_cow_name(cow_name)
    try:
        found = name is not None and await _cow_exists(open_repository, name)
    except CowChatError as e:
        logger.error(
            f"Could not look up cow for chat: {e.message}",
            extra={"error_code": e.code, "cow_name": cow_name},
        )
        await websocket.close(code=CLOSE_INTERNAL_ERROR, reason="Internal error")
        return

    if not found:
        error = EntityNotFoundError(cow_name)
        logger.info(error.message, extra={"error_code": error.code, "cow_name": cow_name})
        await websocket.close(code=CLOSE_POLICY_VIOLATION, reason=error.message)
        return

    await websocket.accept()
    logger.debug(f"Chat session with {name} started", extra={"cow_name": name})
    runner = ChatRunner(
        websocket,
        name,
        open_repository,
        heartbeat_interval=settings.chat_heartbeat_interval_seconds,
        client_timeout=settings.chat_client_timeout_seconds,
    )
    await runner.run()
