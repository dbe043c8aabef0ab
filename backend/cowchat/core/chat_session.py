"""Chat Session — explicit state machine for one cow chat connection.

Invariants:
    - Phases move forward only: starting -> active -> closing -> closed
    - Only Ping/Pong refresh last_heartbeat (text and binary traffic are not liveness)
    - A TimerTick with now - last_heartbeat > client_timeout forces closing
    - Events received outside the active phase produce no actions
    - duration_seconds = floor(last_heartbeat - started_at), never negative

Design Decisions:
    - Pure: time is passed in by the caller, IO is returned as action objects
      (ChatRunner performs them). Testable with a fake clock, no sockets.
    - Events and actions are frozen dataclasses dispatched with match-case
"""

import logging
import math
import random
from dataclasses import dataclass, field

from cowchat.core.catalogs import make_cow_phrase
from cowchat.core.domain_types import ChatPhase, ChatSessionRecord, CowName

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL_SECONDS = 5.0
CLIENT_TIMEOUT_SECONDS = 10.0

CLOSE_NORMAL = 1000
CLOSE_PROTOCOL_ERROR = 1002
CLOSE_POLICY_VIOLATION = 1008


# ─── Inbound events ──────────────────────────────────────────────

@dataclass(frozen=True)
class Ping:
    payload: str = ""


@dataclass(frozen=True)
class Pong:
    payload: str = ""


@dataclass(frozen=True)
class Binary:
    data: bytes = b""


@dataclass(frozen=True)
class Text:
    text: str = ""


@dataclass(frozen=True)
class Close:
    code: int | None = None
    reason: str | None = None


@dataclass(frozen=True)
class TimerTick:
    pass


@dataclass(frozen=True)
class Other:
    description: str = ""


ChatEvent = Ping | Pong | Binary | Text | Close | TimerTick | Other


# ─── Outbound actions ────────────────────────────────────────────

@dataclass(frozen=True)
class SendPong:
    payload: str = ""


@dataclass(frozen=True)
class SendProbe:
    payload: str = "0"


@dataclass(frozen=True)
class SendText:
    text: str


@dataclass(frozen=True)
class CloseConnection:
    code: int = CLOSE_NORMAL
    reason: str | None = None


ChatAction = SendPong | SendProbe | SendText | CloseConnection


@dataclass
class ChatSession:
    """Per-connection chat state — pure dataclass, no IO."""

    cow_name: CowName
    client_timeout: float = CLIENT_TIMEOUT_SECONDS
    rng: random.Random | None = None
    phase: ChatPhase = ChatPhase.STARTING
    started_at: float = 0.0
    last_heartbeat: float = 0.0
    close_reason: str | None = field(default=None)

    @property
    def is_active(self) -> bool:
        return self.phase == ChatPhase.ACTIVE

    @property
    def duration_seconds(self) -> int:
        return max(0, math.floor(self.last_heartbeat - self.started_at))

    def start(self, now: float) -> None:
        """Enter the active phase and stamp the clock."""
        if self.phase != ChatPhase.STARTING:
            raise RuntimeError(f"Cannot start chat session in phase {self.phase.value}")
        self.started_at = now
        self.last_heartbeat = now
        self.phase = ChatPhase.ACTIVE

    def refresh_heartbeat(self, now: float) -> None:
        self.last_heartbeat = max(self.last_heartbeat, now)

    def handle(self, event: ChatEvent, now: float) -> list[ChatAction]:
        """Apply one inbound event, return the actions the transport must perform."""
        if not self.is_active:
            return []
        match event:
            case TimerTick():
                return self._on_tick(now)
            case Ping(payload=payload):
                self.refresh_heartbeat(now)
                return [SendPong(payload)]
            case Pong():
                self.refresh_heartbeat(now)
                return []
            case Binary():
                logger.warning(
                    "Received unsupported binary message!",
                    extra={"cow_name": self.cow_name},
                )
                return []
            case Text():
                return [SendText(make_cow_phrase(self.cow_name, self.rng))]
            case Close(code=code, reason=reason):
                self._begin_closing("client closed")
                return [CloseConnection(code or CLOSE_NORMAL, reason)]
            case _:
                self._begin_closing("unrecognized event")
                return [CloseConnection(CLOSE_PROTOCOL_ERROR, "Unsupported message")]

    def finish(self) -> ChatSessionRecord:
        """Leave closing for closed and produce the session record."""
        if self.phase == ChatPhase.ACTIVE:
            self._begin_closing("transport ended")
        self.phase = ChatPhase.CLOSED
        return ChatSessionRecord(
            cow_name=self.cow_name, duration_seconds=self.duration_seconds,
        )

    def _on_tick(self, now: float) -> list[ChatAction]:
        if now - self.last_heartbeat > self.client_timeout:
            logger.warning(
                "Websocket client missed heartbeat, disconnecting!",
                extra={"cow_name": self.cow_name},
            )
            self._begin_closing("heartbeat timeout")
            return [CloseConnection(CLOSE_NORMAL, "Heartbeat timeout")]
        return [SendProbe()]

    def _begin_closing(self, reason: str) -> None:
        self.phase = ChatPhase.CLOSING
        self.close_reason = reason
