from __future__ import annotations
from enum import IntEnum

class ProtocolVersion(IntEnum):
    V1 = 1
    V2 = 0x01010000   # 16842752, events carry eventName in the header

DEFAULT_VERSION = ProtocolVersion.V1

# Requests sent without a correlation id use this value
ZERO_REQUEST_ID = "00000000-0000-0000-0000-000000000000"

# Command line token that starts the in-band encryption handshake
HANDSHAKE_COMMAND = "enableencryption"

# Canonical field names on the wire
HEADER         = "header"
BODY           = "body"
VERSION        = "version"
REQUEST_ID     = "requestId"
PURPOSE        = "messagePurpose"
EVENT_NAME     = "eventName"
COMMAND_LINE   = "commandLine"
PUBLIC_KEY     = "publicKey"
STATUS_CODE    = "statusCode"
STATUS_MESSAGE = "statusMessage"
