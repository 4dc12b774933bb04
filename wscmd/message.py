from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Union
from enum import StrEnum

from . import constants as C

# Known message purposes; anything else is passed through as a plain string
class MessagePurpose(StrEnum):
    SUBSCRIBE        = "subscribe"
    UNSUBSCRIBE      = "unsubscribe"
    COMMAND_REQUEST  = "commandRequest"
    COMMAND_RESPONSE = "commandResponse"
    EVENT            = "event"
    ERROR            = "error"

    @classmethod
    def parse(cls, value: str) -> Union["MessagePurpose", str]:
        try:
            return cls(value)
        except ValueError:
            return value

@dataclass(frozen=True)
class Header:
    """
    Frame header. 'extra' holds purpose-specific fields (e.g. eventName
    for V2 events) and is flattened into the header object on the wire.
    """
    version: int                      # protocol version of the sender
    request_id: str                   # uuid string, ZERO_REQUEST_ID when uncorrelated
    purpose: Union[MessagePurpose, str]
    extra: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.extra.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        # fields absent from a decoded header stay absent when re-encoded
        fixed = {
            C.VERSION:    self.version,
            C.REQUEST_ID: self.request_id,
            C.PURPOSE:    str(self.purpose),
        }
        return {**{k: v for k, v in fixed.items() if v is not None}, **self.extra}

@dataclass(frozen=True)
class Frame:
    header: Header
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def purpose(self) -> Union[MessagePurpose, str]:
        return self.header.purpose

    @property
    def request_id(self) -> str:
        return self.header.request_id

    def to_dict(self) -> Dict[str, Any]:
        return {C.HEADER: self.header.to_dict(), C.BODY: self.body}
