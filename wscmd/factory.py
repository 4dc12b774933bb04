from __future__ import annotations
from typing import Any, Callable, Mapping, Optional, Union

from . import constants as C
from .connection import Connection
from .encryption import ClientEncryption, EncryptionEngine
from .router import Handler
from .transport import Transport

def connect(address: Optional[str] = None,
            *,
            version: int = C.DEFAULT_VERSION,
            transport: Union[str, Transport] = "websocket",
            encryption: Callable[[], EncryptionEngine] = ClientEncryption,
            handlers: Optional[Mapping[str, Handler]] = None,
            auto_start: bool = True,
            **transport_kwargs: Any) -> Connection:
    """
    One-liner factory:
      connect("ws://localhost:19131", version=ProtocolVersion.V2, handlers={"command": on_command})
      connect(transport=MemoryTransport())

    - address: websocket URL (required for transport="websocket")
    - version: protocol version stamped on every outgoing header
    - transport: "websocket" | "memory" | Transport instance
    - encryption: factory for the engine used when a handshake arrives
    - handlers: notification kind -> handler, registered before the transport starts
    - auto_start: start the transport immediately
    - **transport_kwargs: passed to the transport constructor
    """
    if isinstance(transport, str):
        tlabel = transport.lower()
        if tlabel == "websocket":
            if not address:
                raise ValueError("websocket transport requires an address")
            from .transports.websocket import WebSocketTransport
            t = WebSocketTransport(address, **transport_kwargs)
        elif tlabel == "memory":
            from .transports.memory import MemoryTransport
            t = MemoryTransport()
        else:
            raise ValueError(f"Unknown transport label: {transport}")
    else:
        t = transport

    conn = Connection(t, version=version, encryption=encryption)

    if handlers:
        for kind, handler in handlers.items():
            conn.on(kind, handler)

    if auto_start:
        t.start()

    return conn
