"""Tests for frame encoding and decoding."""

import json

import pytest

from wscmd import (
    Frame,
    FrameBuilder,
    Header,
    MalformedFrame,
    MessagePurpose,
    ProtocolVersion,
    decode,
    encode,
)

from conftest import FakeEngine


def test_encode_is_compact_json():
    """Frames are serialized as compact JSON with header and body."""
    frame = FrameBuilder(ProtocolVersion.V1).response("r1", {"statusCode": 0}).build()
    data = encode(frame)
    assert b" " not in data
    obj = json.loads(data)
    assert obj == {
        "header": {"version": 1, "requestId": "r1", "messagePurpose": "commandResponse"},
        "body": {"statusCode": 0},
    }


def test_round_trip_without_session():
    """Header (including extra fields) and body survive encode/decode."""
    frame = Frame(
        Header(ProtocolVersion.V2, "abc", MessagePurpose.EVENT, {"eventName": "PlayerMessage"}),
        {"message": "hi", "nested": {"a": [1, 2, 3]}},
    )
    assert decode(encode(frame)) == frame


def test_round_trip_custom_purpose():
    """Unknown purposes are kept verbatim."""
    frame = Frame(Header(1, "x", "somethingNew"), {})
    decoded = decode(encode(frame))
    assert decoded.header.purpose == "somethingNew"
    assert not isinstance(decoded.header.purpose, MessagePurpose)


def test_decode_known_purpose_is_enum():
    decoded = decode(b'{"header":{"messagePurpose":"subscribe"},"body":{"eventName":"e"}}')
    assert decoded.header.purpose is MessagePurpose.SUBSCRIBE
    assert decoded.body == {"eventName": "e"}


def test_decode_accepts_text():
    decoded = decode('{"header":{"messagePurpose":"event"},"body":{}}')
    assert decoded.header.purpose == MessagePurpose.EVENT


def test_decode_missing_body_is_empty():
    decoded = decode(b'{"header":{"messagePurpose":"event"}}')
    assert decoded.body == {}


@pytest.mark.parametrize("raw", [
    b"not json",
    b"[1, 2]",
    b'{"body": {}}',
    b'{"header": {"requestId": "r"}, "body": {}}',
    b'{"header": "nope", "body": {}}',
    b'{"header": {"messagePurpose": "event"}, "body": [1]}',
    b"\xff\xfe",
])
def test_decode_malformed(raw):
    """Undecodable or header-incomplete input raises MalformedFrame."""
    with pytest.raises(MalformedFrame):
        decode(raw)


def test_malformed_frame_is_value_error():
    with pytest.raises(ValueError):
        decode(b"{")


def test_session_encrypts_and_decrypts():
    """With a session the bytes on the wire are transformed, and reversed on decode."""
    engine = FakeEngine()
    frame = FrameBuilder().event("PlayerMessage", {"message": "hi"}).build()
    data = encode(frame, engine)
    with pytest.raises(MalformedFrame):
        decode(data)
    assert decode(data, engine) == frame


def test_absent_header_fields_stay_absent():
    """A header without version or requestId re-encodes without them."""
    decoded = decode(b'{"header":{"messagePurpose":"event","eventName":"e"},"body":{}}')
    assert decoded.header.version is None
    assert decoded.header.request_id is None
    header = json.loads(encode(decoded))["header"]
    assert header == {"messagePurpose": "event", "eventName": "e"}
