from __future__ import annotations
from typing import Any, Dict, Optional, Union

from . import constants as C
from .constants import ProtocolVersion
from .message import Frame, Header, MessagePurpose

def build_header(purpose: Union[MessagePurpose, str],
                 request_id: Optional[str] = None,
                 version: int = C.DEFAULT_VERSION,
                 extra: Optional[Dict[str, Any]] = None) -> Header:
    """Header with the sentinel request id filled in when none is given."""
    return Header(
        version=version,
        request_id=request_id or C.ZERO_REQUEST_ID,
        purpose=MessagePurpose.parse(str(purpose)),
        extra=dict(extra or {}),
    )

class FrameBuilder:
    """
    Builder that always produces a well-formed Frame stamped with the
    connection's protocol version.
     - response/error are correlated by request id
     - event follows the version rule: V2 puts eventName in the header,
       V1 merges it into the body
    """
    def __init__(self, version: int = C.DEFAULT_VERSION):
        self._version = version
        self._purpose: Union[MessagePurpose, str] = MessagePurpose.EVENT
        self._request_id: Optional[str] = None
        self._extra: Dict[str, Any] = {}
        self._body: Dict[str, Any] = {}

    def purpose(self, purpose: Union[MessagePurpose, str]):
        self._purpose = purpose
        return self

    def request(self, request_id: Optional[str]):
        self._request_id = request_id
        return self

    def extra(self, fields: Optional[Dict[str, Any]] = None, **kw: Any):
        self._extra.update(fields or {})
        self._extra.update(kw)
        return self

    def json(self, body: Optional[Dict[str, Any]]):
        self._body = body if body is not None else {}
        return self

    def response(self, request_id: Optional[str], body: Dict[str, Any]):
        self._purpose    = MessagePurpose.COMMAND_RESPONSE
        self._request_id = request_id
        self._body       = body
        return self

    def error(self, status_code: int, status_message: str, request_id: Optional[str] = None):
        self._purpose    = MessagePurpose.ERROR
        self._request_id = request_id
        self._body       = {C.STATUS_CODE: status_code, C.STATUS_MESSAGE: status_message}
        return self

    def event(self, event_name: str, body: Optional[Dict[str, Any]]):
        self._purpose = MessagePurpose.EVENT
        if self._version == ProtocolVersion.V2:
            self._extra[C.EVENT_NAME] = event_name
            self._body = body if body is not None else {}
        else:
            self._body = {**(body or {}), C.EVENT_NAME: event_name}
        return self

    def build(self) -> Frame:
        header = build_header(self._purpose, self._request_id, self._version, self._extra)
        return Frame(header, self._body)
