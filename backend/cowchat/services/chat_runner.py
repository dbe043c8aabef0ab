"""Chat Runner — drives one ChatSession over an accepted WebSocket.

Invariants:
    - Exactly one consumer applies events to the ChatSession (no concurrent handlers)
    - Reader and ticker tasks only enqueue events; both are cancelled when the session ends
    - The chat session record is written once, after the session leaves active
    - A failed record write is logged and never raised (teardown must complete)
    - No pooled connection is held while the chat is open

Design Decisions:
    - asyncio.Queue fan-in: inbound frames and timer ticks share one ordered stream,
      so heartbeat checks interleave cooperatively with frame handling
    - Repository scope injected (RepositoryScope): tests use an in-memory fake
    - Sends after the peer went away end the session instead of raising
"""

import asyncio
import logging
import random
import time
from typing import Callable

from fastapi import WebSocket
from fastapi.websockets import WebSocketDisconnect, WebSocketState

from cowchat.core.chat_frames import control_frame, decode_frame
from cowchat.core.chat_session import (
    CLIENT_TIMEOUT_SECONDS, HEARTBEAT_INTERVAL_SECONDS,
    ChatAction, ChatEvent, ChatSession, CloseConnection, Other,
    SendPong, SendProbe, SendText, TimerTick,
)
from cowchat.core.domain_types import ChatSessionRecord, CowName
from cowchat.core.repository_protocols import RepositoryScope

logger = logging.getLogger(__name__)


class ChatRunner:
    """Runs the event loop of one cow chat connection."""

    def __init__(
        self,
        websocket: WebSocket,
        cow_name: CowName,
        open_repository: RepositoryScope,
        heartbeat_interval: float = HEARTBEAT_INTERVAL_SECONDS,
        client_timeout: float = CLIENT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ):
        self.websocket = websocket
        self.session = ChatSession(cow_name, client_timeout=client_timeout, rng=rng)
        self._open_repository = open_repository
        self._heartbeat_interval = heartbeat_interval
        self._clock = clock
        self._peer_closed = False
        self._transport_open = True

    async def run(self) -> ChatSessionRecord:
        """Process events until the session closes, then record it."""
        events: asyncio.Queue[ChatEvent] = asyncio.Queue()
        self.session.start(self._clock())
        reader = asyncio.create_task(self._read_frames(events))
        ticker = asyncio.create_task(self._tick(events))
        try:
            while self.session.is_active and self._transport_open:
                event = await events.get()
                actions = self.session.handle(event, self._clock())
                for action in actions:
                    await self._perform(action)
        finally:
            for task in (reader, ticker):
                task.cancel()
            await asyncio.gather(reader, ticker, return_exceptions=True)
            record = self.session.finish()
            await self._record(record)
        return record

    async def _read_frames(self, events: asyncio.Queue) -> None:
        while True:
            try:
                message = await self.websocket.receive()
            except RuntimeError as e:
                # Starlette refuses receive() once the socket is gone
                self._peer_closed = True
                await events.put(Other(f"receive failed: {e}"))
                return
            logger.debug(
                "WS msg from client: %r", message,
                extra={"cow_name": self.session.cow_name},
            )
            disconnected = message.get("type") == "websocket.disconnect"
            if disconnected:
                self._peer_closed = True
            await events.put(decode_frame(message))
            if disconnected:
                return

    async def _tick(self, events: asyncio.Queue) -> None:
        while True:
            await asyncio.sleep(self._heartbeat_interval)
            await events.put(TimerTick())

    async def _perform(self, action: ChatAction) -> None:
        if not self._can_send():
            self._transport_open = False
            return
        try:
            match action:
                case SendPong(payload=payload):
                    await self.websocket.send_json(control_frame("pong", payload=payload))
                case SendProbe(payload=payload):
                    await self.websocket.send_json(control_frame("ping", payload=payload))
                case SendText(text=text):
                    await self.websocket.send_text(text)
                case CloseConnection(code=code, reason=reason):
                    await self.websocket.close(code=code, reason=reason)
                    self._transport_open = False
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.debug(
                f"Send to departed client failed: {e}",
                extra={"cow_name": self.session.cow_name},
            )
            self._peer_closed = True
            self._transport_open = False

    def _can_send(self) -> bool:
        return (
            not self._peer_closed
            and self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    async def _record(self, record: ChatSessionRecord) -> None:
        """Best-effort write of the session record."""
        logger.debug(
            "Recording chat session with %s that lasted for %s seconds...",
            record.cow_name, record.duration_seconds,
            extra={
                "cow_name": record.cow_name,
                "duration_seconds": record.duration_seconds,
                "close_reason": self.session.close_reason,
            },
        )
        try:
            async with self._open_repository() as repo:
                await repo.insert_chat_session(record)
        except Exception as e:
            logger.error(
                f"Failed to record chat session in DB: {e}",
                extra={"cow_name": record.cow_name},
            )
