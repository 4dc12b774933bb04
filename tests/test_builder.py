"""Tests for header construction and the frame builder."""

from wscmd import (
    FrameBuilder,
    MessagePurpose,
    ProtocolVersion,
    ZERO_REQUEST_ID,
    build_header,
)


def test_header_defaults_request_id():
    """An omitted request id becomes the all-zero sentinel."""
    header = build_header(MessagePurpose.EVENT)
    assert header.request_id == "00000000-0000-0000-0000-000000000000"
    assert header.request_id == ZERO_REQUEST_ID
    assert header.version == ProtocolVersion.V1


def test_header_stamps_version_and_extra():
    header = build_header("commandResponse", "r1", ProtocolVersion.V2, {"foo": 1})
    assert header.to_dict() == {
        "version": 16842752,
        "requestId": "r1",
        "messagePurpose": "commandResponse",
        "foo": 1,
    }


def test_event_v1_merges_event_name_into_body():
    body = {"message": "hi"}
    frame = FrameBuilder(ProtocolVersion.V1).event("PlayerMessage", body).build()
    assert frame.body == {"message": "hi", "eventName": "PlayerMessage"}
    assert "eventName" not in frame.header.to_dict()
    # caller's dict is not modified
    assert body == {"message": "hi"}


def test_event_v2_puts_event_name_in_header():
    body = {"message": "hi"}
    frame = FrameBuilder(ProtocolVersion.V2).event("PlayerMessage", body).build()
    assert frame.body == {"message": "hi"}
    assert frame.header.get("eventName") == "PlayerMessage"


def test_error_frame():
    frame = FrameBuilder().error(-2147483648, "Syntax error", "r9").build()
    assert frame.header.purpose is MessagePurpose.ERROR
    assert frame.header.request_id == "r9"
    assert frame.body == {"statusCode": -2147483648, "statusMessage": "Syntax error"}
