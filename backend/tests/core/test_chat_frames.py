"""Chat Frames — ASGI message decoding into chat session events."""

import json

import pytest

from cowchat.core.chat_frames import control_frame, decode_frame
from cowchat.core.chat_session import (
    Binary, Close, Other, Ping, Pong, Text,
)


def _text(text: str) -> dict:
    return {"type": "websocket.receive", "text": text}


def test_plain_text_is_chat():
    assert decode_frame(_text("hi")) == Text("hi")


def test_json_ping_is_control_frame():
    assert decode_frame(_text(json.dumps({"type": "ping", "payload": "7"}))) == Ping("7")


def test_json_pong_is_control_frame():
    assert decode_frame(_text('{"type": "pong"}')) == Pong("")


def test_json_close_carries_code_and_reason():
    frame = _text(json.dumps({"type": "close", "code": 4001, "reason": "done"}))
    assert decode_frame(frame) == Close(4001, "done")


def test_json_close_with_invalid_code_drops_code():
    assert decode_frame(_text('{"type": "close", "code": 12}')) == Close(None, None)


def test_json_without_control_type_is_chat():
    text = '{"type": "moo"}'
    assert decode_frame(_text(text)) == Text(text)


def test_malformed_json_is_chat():
    assert decode_frame(_text("{not json")) == Text("{not json")


def test_bytes_are_binary():
    assert decode_frame({"type": "websocket.receive", "bytes": b"\x00"}) == Binary(b"\x00")


def test_disconnect_is_close():
    assert decode_frame({"type": "websocket.disconnect", "code": 1001}) == Close(1001, None)


def test_empty_receive_is_other():
    assert isinstance(decode_frame({"type": "websocket.receive"}), Other)


def test_unknown_message_type_is_other():
    assert decode_frame({"type": "websocket.mystery"}) == Other("websocket.mystery")


def test_control_frame_builds_body():
    assert control_frame("pong", payload="x") == {"type": "pong", "payload": "x"}


@pytest.mark.parametrize("code", [1004, 1005, 1006, 1015, 2000, 2999, 5000])
def test_json_close_with_reserved_code_drops_code(code):
    frame = _text(json.dumps({"type": "close", "code": code}))
    assert decode_frame(frame) == Close(None, None)


@pytest.mark.parametrize("code", [1000, 1003, 1007, 1011, 1014, 3000, 4999])
def test_json_close_keeps_sendable_code(code):
    frame = _text(json.dumps({"type": "close", "code": code}))
    assert decode_frame(frame) == Close(code, None)


def test_disconnect_with_reserved_code_drops_code():
    assert decode_frame({"type": "websocket.disconnect", "code": 1006}) == Close(None, None)


def test_null_payload_is_empty():
    assert decode_frame(_text('{"type": "ping", "payload": null}')) == Ping("")
    assert decode_frame(_text('{"type": "pong", "payload": null}')) == Pong("")


def test_non_string_payload_is_stringified():
    assert decode_frame(_text('{"type": "ping", "payload": 0}')) == Ping("0")
