from __future__ import annotations
import logging
import threading
from typing import Any, Dict, List, Optional

from websocket import ABNF, WebSocketApp

from ..transport import CloseCb, ErrorCb, ReceiveCb, Transport

logger = logging.getLogger(__name__)

class WebSocketTransport(Transport):
    """Transport over websocket-client.

    Mapping:
    - plaintext frames -> text messages, encrypted frames -> binary messages
    - inbound text is UTF-8 encoded so the codec always sees bytes
    - run_forever() runs on one daemon thread, so receive callbacks are
      delivered sequentially

    Keyword arguments other than 'header' are passed to run_forever()
    (e.g. sslopt, ping_interval, http_proxy_host).
    """

    def __init__(self, url: str, header: Optional[Dict[str, str]] = None, **run_kwargs: Any):
        self.url = url
        self._run_kwargs = run_kwargs
        self._rx: List[ReceiveCb] = []
        self._close: List[CloseCb] = []
        self._error: List[ErrorCb] = []
        self._opened = threading.Event()
        self._closed = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.app = WebSocketApp(
            url,
            header=header,
            on_open=self._handle_open,
            on_message=self._handle_message,
            on_error=self._handle_error,
            on_close=self._handle_close,
        )

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name=f"ws:{self.url}", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        logger.info("connecting to %s", self.url)
        self.app.run_forever(**self._run_kwargs)
        # run_forever can return without on_close if the connect failed
        self._handle_close(self.app, None, None)

    def wait_open(self, timeout: Optional[float] = None) -> bool:
        return self._opened.wait(timeout)

    def stop(self) -> None:
        self.app.close()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=1)

    def send(self, frame: bytes, binary: bool = False) -> None:
        if binary:
            self.app.send(frame, opcode=ABNF.OPCODE_BINARY)
        else:
            self.app.send(frame.decode("utf-8"), opcode=ABNF.OPCODE_TEXT)

    def on_receive(self, cb: ReceiveCb) -> None:
        self._rx.append(cb)

    def on_close(self, cb: CloseCb) -> None:
        self._close.append(cb)

    def on_error(self, cb: ErrorCb) -> None:
        self._error.append(cb)

    # ---- websocket-client callbacks ----
    def _handle_open(self, ws) -> None:
        logger.info("connected to %s", self.url)
        self._opened.set()

    def _handle_message(self, ws, message) -> None:
        if isinstance(message, str):
            message = message.encode("utf-8")
        for cb in list(self._rx):
            cb(message)

    def _handle_error(self, ws, error) -> None:
        logger.debug("websocket error on %s: %r", self.url, error)
        for cb in list(self._error):
            cb(error)

    def _handle_close(self, ws, status_code, reason) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        logger.info("connection to %s closed (%s %s)", self.url, status_code, reason or "")
        for cb in list(self._close):
            cb()
