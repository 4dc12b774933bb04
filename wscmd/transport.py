from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

ReceiveCb = Callable[[bytes], None]
CloseCb   = Callable[[], None]
ErrorCb   = Callable[[BaseException], None]

class Transport(ABC):
    """
    Moves whole frames between us and the remote peer. Received frames must
    be delivered one at a time, each callback returning before the next.
    """

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Close the connection; close callbacks fire once it is down."""
        raise NotImplementedError

    @abstractmethod
    def send(self, frame: bytes, binary: bool = False) -> None:
        """Send one frame. Text frames (binary=False) must be UTF-8."""
        raise NotImplementedError

    @abstractmethod
    def on_receive(self, cb: ReceiveCb) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_close(self, cb: CloseCb) -> None:
        raise NotImplementedError

    def on_error(self, cb: ErrorCb) -> None:
        """Optional: transports that report asynchronous errors override this."""
