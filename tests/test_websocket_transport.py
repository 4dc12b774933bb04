"""Tests for the websocket-client transport, with WebSocketApp mocked out."""

from unittest.mock import MagicMock, patch

import pytest
from websocket import ABNF

from wscmd import Connection, Notice
from wscmd.transports.websocket import WebSocketTransport

from conftest import raw_frame


@pytest.fixture
def app():
    with patch("wscmd.transports.websocket.WebSocketApp") as cls:
        yield cls


def test_app_configured(app):
    t = WebSocketTransport("ws://localhost:19131", header={"X-Test": "1"})
    args, kwargs = app.call_args
    assert args == ("ws://localhost:19131",)
    assert kwargs["header"] == {"X-Test": "1"}
    assert kwargs["on_message"] == t._handle_message
    assert kwargs["on_close"] == t._handle_close


def test_text_and_binary_send(app):
    t = WebSocketTransport("ws://x")
    t.send(b'{"a":1}')
    t.send(b"\x00\x01", binary=True)
    first, second = t.app.send.call_args_list
    assert first.args == ('{"a":1}',)
    assert first.kwargs == {"opcode": ABNF.OPCODE_TEXT}
    assert second.args == (b"\x00\x01",)
    assert second.kwargs == {"opcode": ABNF.OPCODE_BINARY}


def test_text_messages_reach_connection_as_bytes(app):
    t = WebSocketTransport("ws://x")
    conn = Connection(t)
    seen = []
    conn.on(Notice.MESSAGE, seen.append)
    t._handle_message(t.app, raw_frame("event", {"eventName": "e"}).decode())
    assert seen[0].body == {"eventName": "e"}


def test_close_notifies_once(app):
    t = WebSocketTransport("ws://x")
    conn = Connection(t)
    closed = []
    conn.on(Notice.DISCONNECT, closed.append)
    t._handle_close(t.app, 1000, "bye")
    t._handle_close(t.app, None, None)
    assert len(closed) == 1


def test_errors_forwarded(app):
    t = WebSocketTransport("ws://x")
    conn = Connection(t)
    errors = []
    conn.on(Notice.ERROR, errors.append)
    err = OSError("connection refused")
    t._handle_error(t.app, err)
    assert errors[0].error is err


def test_start_runs_app_in_thread(app):
    t = WebSocketTransport("ws://x", ping_interval=30)
    t.start()
    t._thread.join(timeout=1)
    t.app.run_forever.assert_called_once_with(ping_interval=30)


def test_stop_closes_app(app):
    t = WebSocketTransport("ws://x")
    t.stop()
    t.app.close.assert_called_once()


def test_wait_open(app):
    t = WebSocketTransport("ws://x")
    assert t.wait_open(timeout=0) is False
    t._handle_open(MagicMock())
    assert t.wait_open(timeout=0) is True
