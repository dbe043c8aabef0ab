"""Chat Frames — maps raw ASGI WebSocket messages to chat session events.

Invariants:
    - Text frames holding a JSON object with type ping/pong/close are control frames
    - Every other text frame is chat content (Text)
    - Bytes frames are Binary, websocket.disconnect is Close, anything else is Other
    - Close codes reserved by RFC 6455 (1004-1006, 1015-2999) decode as None
    - decode_frame never raises

Design Decisions:
    - Application-level control frames: ASGI servers answer protocol ping/pong
      themselves and never surface them to the app, so liveness travels as JSON
    - Pure function over the ASGI message dict: no Starlette types in core
"""

import json

from cowchat.core.chat_session import (
    Binary, ChatEvent, Close, Other, Ping, Pong, Text,
)

CONTROL_TYPES = ("ping", "pong", "close")


def decode_frame(message: dict) -> ChatEvent:
    """Translate one ASGI receive message into a ChatEvent."""
    msg_type = message.get("type")
    if msg_type == "websocket.disconnect":
        return Close(code=_close_code(message.get("code")), reason=message.get("reason"))
    if msg_type != "websocket.receive":
        return Other(str(msg_type))

    if message.get("bytes") is not None:
        return Binary(message["bytes"])
    text = message.get("text")
    if text is None:
        return Other("empty frame")

    control = _parse_control(text)
    if control is None:
        return Text(text)
    match control.get("type"):
        case "ping":
            return Ping(_payload(control))
        case "pong":
            return Pong(_payload(control))
        case _:
            reason = control.get("reason")
            return Close(
                code=_close_code(control.get("code")),
                reason=str(reason) if reason is not None else None,
            )


def control_frame(frame_type: str, **fields: object) -> dict:
    """Build an outbound control frame body."""
    return {"type": frame_type, **fields}


def _payload(control: dict) -> str:
    payload = control.get("payload")
    return "" if payload is None else str(payload)


def _close_code(value: object) -> int | None:
    # 1004-1006, 1015 and 1016-2999 are reserved and never sent in a close frame
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    if 1000 <= value <= 1003 or 1007 <= value <= 1014 or 3000 <= value <= 4999:
        return value
    return None


def _parse_control(text: str) -> dict | None:
    """Return the JSON control object, or None for plain chat text."""
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    if isinstance(data, dict) and data.get("type") in CONTROL_TYPES:
        return data
    return None
