from __future__ import annotations


class ProtocolError(Exception):
    """Base class for errors raised by the protocol core."""


class MalformedFrame(ProtocolError, ValueError):
    """Inbound bytes could not be decoded into a frame.

    Usually means the two ends are out of sync (for example one side
    encrypts and the other does not), so it is raised rather than dropped.
    """


class HandshakeAlreadyActive(ProtocolError, RuntimeError):
    """An encryption handshake arrived after encryption was enabled."""
