from __future__ import annotations
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from .message import Frame, Header, MessagePurpose

if TYPE_CHECKING:
    from .connection import Connection

# Notifications a Connection emits to its observers
class Notice(StrEnum):
    SUBSCRIBE          = "subscribe"
    UNSUBSCRIBE        = "unsubscribe"
    COMMAND            = "command"
    COMMAND_LEGACY     = "commandLegacy"
    CUSTOM_FRAME       = "customFrame"
    MESSAGE            = "message"
    ENCRYPTION_ENABLED = "encryptionEnabled"
    DISCONNECT         = "disconnect"
    ERROR              = "error"

@dataclass(frozen=True)
class FrameContext:
    """One inbound frame plus the connection it arrived on."""
    connection: "Connection"
    frame: Frame

    @property
    def header(self) -> Header:
        return self.frame.header

    @property
    def body(self) -> Dict[str, Any]:
        return self.frame.body

    @property
    def purpose(self) -> Union[MessagePurpose, str]:
        return self.frame.header.purpose

    @property
    def version(self) -> int:
        return self.frame.header.version

    @property
    def request_id(self) -> Optional[str]:
        return self.frame.header.request_id

@dataclass(frozen=True)
class SubscriptionChange(FrameContext):
    event_name: str

@dataclass(frozen=True)
class CommandRequest(FrameContext):
    command_line: str

    def respond(self, body: Dict[str, Any]) -> None:
        """Send a commandResponse correlated to this request."""
        self.connection.respond_command(self.request_id, body)

    def handle_encryption_handshake(self) -> bool:
        """Run the encryption handshake if this command asks for one."""
        return self.connection.handle_encryption_handshake(self.request_id, self.command_line)

@dataclass(frozen=True)
class LegacyCommandRequest(FrameContext):
    command_name: Optional[str]
    overload: Any
    input: Any

    def respond(self, body: Dict[str, Any]) -> None:
        self.connection.respond_command(self.request_id, body)

@dataclass(frozen=True)
class ConnectionNotice:
    connection: "Connection"

@dataclass(frozen=True)
class ErrorNotice(ConnectionNotice):
    error: BaseException
