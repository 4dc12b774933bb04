from __future__ import annotations
from typing import Any, Optional, Protocol as TypingProtocol

import json

from . import constants as C
from .errors import MalformedFrame
from .message import Frame, Header, MessagePurpose

class Codec(TypingProtocol):
    name: str
    def dumps(self, obj: Any) -> bytes: ...
    def loads(self, data: bytes) -> Any: ...

class Cipher(TypingProtocol):
    def encrypt(self, data: bytes) -> bytes: ...
    def decrypt(self, data: bytes) -> bytes: ...

class JSONCodec:
    name = "json"
    def dumps(self, obj: Any) -> bytes:
        return json.dumps(obj, separators=(",", ":")).encode("utf-8")
    def loads(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))

class FrameCodec:
    """
    Frame <-> bytes. When a session is passed, bytes go through it
    (decrypt before parsing, encrypt after serializing).
    """
    def __init__(self, codec: Codec = JSONCodec()):
        self.codec = codec

    def encode(self, frame: Frame, session: Optional[Cipher] = None) -> bytes:
        data = self.codec.dumps(frame.to_dict())
        if session is not None:
            data = session.encrypt(data)
        return data

    def decode(self, raw: bytes, session: Optional[Cipher] = None) -> Frame:
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        data = session.decrypt(raw) if session is not None else raw
        try:
            obj = self.codec.loads(data)
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedFrame(f"undecodable frame: {e}") from e

        if not isinstance(obj, dict):
            raise MalformedFrame("frame is not a JSON object")
        header = obj.get(C.HEADER)
        if not isinstance(header, dict):
            raise MalformedFrame("frame has no header object")
        purpose = header.get(C.PURPOSE)
        if not isinstance(purpose, str) or not purpose:
            raise MalformedFrame("header has no messagePurpose")
        body = obj.get(C.BODY)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise MalformedFrame("frame body is not a JSON object")

        extra = {k: v for k, v in header.items() if k not in (C.VERSION, C.REQUEST_ID, C.PURPOSE)}
        return Frame(
            Header(
                version=header.get(C.VERSION),
                request_id=header.get(C.REQUEST_ID),
                purpose=MessagePurpose.parse(purpose),
                extra=extra,
            ),
            body,
        )

_default = FrameCodec()

def encode(frame: Frame, session: Optional[Cipher] = None) -> bytes:
    return _default.encode(frame, session)

def decode(raw: bytes, session: Optional[Cipher] = None) -> Frame:
    return _default.decode(raw, session)
