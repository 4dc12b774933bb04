from __future__ import annotations
from typing import List, Tuple

from ..transport import CloseCb, ErrorCb, ReceiveCb, Transport

class MemoryTransport(Transport):
    """In-process transport.

    - send() appends (frame, binary) to .sent instead of touching a socket
    - deliver() plays an inbound frame into the receive callbacks
    - stop() fires the close callbacks once; sending afterwards raises
    """

    def __init__(self):
        self.sent: List[Tuple[bytes, bool]] = []
        self.running = False
        self.closed = False
        self._rx: List[ReceiveCb] = []
        self._close: List[CloseCb] = []
        self._error: List[ErrorCb] = []

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        if self.closed:
            return
        self.running = False
        self.closed = True
        for cb in list(self._close):
            cb()

    def send(self, frame: bytes, binary: bool = False) -> None:
        if self.closed:
            raise ConnectionError("transport is closed")
        self.sent.append((frame, binary))

    def on_receive(self, cb: ReceiveCb) -> None:
        self._rx.append(cb)

    def on_close(self, cb: CloseCb) -> None:
        self._close.append(cb)

    def on_error(self, cb: ErrorCb) -> None:
        self._error.append(cb)

    def deliver(self, frame) -> None:
        if isinstance(frame, str):
            frame = frame.encode("utf-8")
        for cb in list(self._rx):
            cb(frame)

    def fail(self, error: BaseException) -> None:
        for cb in list(self._error):
            cb(error)
