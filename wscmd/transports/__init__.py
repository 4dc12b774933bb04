from .memory import MemoryTransport
from .websocket import WebSocketTransport

__all__ = ["MemoryTransport", "WebSocketTransport"]
