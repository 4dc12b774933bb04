"""
Public API:
- connect: one-call factory (transport + connection + handlers)
- Connection: send/respond/publish, observer registration, lifecycle
- Frame, Header, MessagePurpose: wire-level types
- FrameBuilder, build_header: well-formed outgoing frames
- FrameCodec, encode, decode: Frame <-> bytes (JSON, optionally encrypted)
- ClientEncryption, EncryptionSession: in-band encryption handshake
- SubscriptionTable: which events the remote peer asked for
- Transport: abstract class transports must implement
- Notice and the notification context types handed to observers
"""

from .constants import ProtocolVersion, ZERO_REQUEST_ID, DEFAULT_VERSION

# Core runtime
from .connection import Connection, ConnectionState
from .factory import connect

# Builder & wire types
from .builder import FrameBuilder, build_header
from .message import Frame, Header, MessagePurpose
from .codecs import FrameCodec, JSONCodec, encode, decode

# Encryption
from .encryption import ClientEncryption, EncryptionEngine, EncryptionSession

# Routing
from .subscriptions import SubscriptionTable
from .router import Observers, Router
from .notifications import (
    Notice,
    FrameContext,
    SubscriptionChange,
    CommandRequest,
    LegacyCommandRequest,
    ConnectionNotice,
    ErrorNotice,
)

# Transport contract
from .transport import Transport

from .errors import ProtocolError, MalformedFrame, HandshakeAlreadyActive

__all__ = [
    "connect",
    "Connection",
    "ConnectionState",
    "ProtocolVersion",
    "ZERO_REQUEST_ID",
    "DEFAULT_VERSION",
    "FrameBuilder",
    "build_header",
    "Frame",
    "Header",
    "MessagePurpose",
    "FrameCodec",
    "JSONCodec",
    "encode",
    "decode",
    "ClientEncryption",
    "EncryptionEngine",
    "EncryptionSession",
    "SubscriptionTable",
    "Observers",
    "Router",
    "Notice",
    "FrameContext",
    "SubscriptionChange",
    "CommandRequest",
    "LegacyCommandRequest",
    "ConnectionNotice",
    "ErrorNotice",
    "Transport",
    "ProtocolError",
    "MalformedFrame",
    "HandshakeAlreadyActive",
]

__version__ = "0.1.0"
