from __future__ import annotations
import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from . import constants as C
from .builder import FrameBuilder
from .codecs import FrameCodec
from .encryption import ClientEncryption, EncryptionEngine, EncryptionSession
from .errors import ProtocolError
from .message import Frame, MessagePurpose
from .notifications import ConnectionNotice, ErrorNotice, Notice
from .router import Handler, Observers, Router
from .subscriptions import SubscriptionTable
from .transport import Transport

logger = logging.getLogger(__name__)

class ConnectionState(Enum):
    OPEN_PLAINTEXT = "open-plaintext"
    OPEN_ENCRYPTED = "open-encrypted"
    CLOSED         = "closed"


class Connection:

    # Notes:
    # - fire and forget: nothing here waits for a reply or retries
    # - inbound frames are handled one at a time, decode -> route -> notify
    # - publish_event only sends what the remote peer subscribed to
    # - plaintext -> encrypted -> closed; none of these steps go back

    def __init__(self, transport: Transport, version: int = C.DEFAULT_VERSION,
                 encryption: Callable[[], EncryptionEngine] = ClientEncryption,
                 codec: Optional[FrameCodec] = None):
        self.t = transport
        self.version = version
        self.codec = codec or FrameCodec()
        self.subscriptions = SubscriptionTable()
        self.observers = Observers()
        self._session = EncryptionSession(encryption)
        self._router = Router(self, self.subscriptions, self.observers)
        self._closed = False
        # encrypt+send must be atomic: the cipher is a stream shared by every frame
        self._send_lock = threading.RLock()

        self.t.on_receive(self._on_transport_message)
        self.t.on_close(self._on_transport_close)
        self.t.on_error(self._on_transport_error)

    # ---- observers ----
    def on(self, kind: Union[Notice, str], handler: Handler) -> None:
        """Register a handler for one notification kind."""
        self.observers.on(kind, handler)

    def off(self, kind: Union[Notice, str], handler: Handler) -> None:
        self.observers.off(kind, handler)

    # ---- state ----
    @property
    def state(self) -> ConnectionState:
        if self._closed:
            return ConnectionState.CLOSED
        if self._session.is_active():
            return ConnectionState.OPEN_ENCRYPTED
        return ConnectionState.OPEN_PLAINTEXT

    def is_encrypted(self) -> bool:
        return self._session.is_active()

    # ---- inbound ----
    def receive(self, raw: bytes) -> Frame:
        """Decode one inbound frame and notify observers. Raises MalformedFrame."""
        session = self._session if self._session.is_active() else None
        frame = self.codec.decode(raw, session)
        logger.debug("recv %s %s", frame.header.purpose, frame.header.request_id)
        self._router.dispatch(frame)
        return frame

    def handle_encryption_handshake(self, request_id: Optional[str], command_line: str) -> bool:
        """
        Enable encryption if command_line is an 'enableencryption' request.
        The reply goes out in plaintext; every frame after it is encrypted.
        Returns False (and does nothing) for any other command line.
        """
        # no other frame may go out between the plaintext reply and the switch
        with self._send_lock:
            done = self._session.perform_handshake(
                command_line, lambda body: self.respond_command(request_id, body))
        if done:
            logger.info("encryption enabled")
            self.observers.emit(Notice.ENCRYPTION_ENABLED, ConnectionNotice(self))
        return done

    # ---- outbound ----
    def send_message(self, frame: Frame) -> None:
        """Encode (and encrypt, when enabled) a frame and hand it to the transport."""
        with self._send_lock:
            encrypted = self._session.is_active()
            data = self.codec.encode(frame, self._session if encrypted else None)
            logger.debug("send %s %s", frame.header.purpose, frame.header.request_id)
            self.t.send(data, binary=encrypted)

    def send_frame(self, purpose: Union[MessagePurpose, str], body: Optional[Dict[str, Any]],
                   request_id: Optional[str] = None,
                   extra_headers: Optional[Dict[str, Any]] = None) -> None:
        frame = (FrameBuilder(self.version)
                 .purpose(purpose)
                 .request(request_id)
                 .extra(extra_headers)
                 .json(body)
                 .build())
        self.send_message(frame)

    def send_error(self, status_code: int, status_message: str, request_id: Optional[str] = None) -> None:
        self.send_message(FrameBuilder(self.version).error(status_code, status_message, request_id).build())

    def send_event(self, event_name: str, body: Optional[Dict[str, Any]]) -> None:
        """Send an event whether or not it was subscribed to."""
        self.send_message(FrameBuilder(self.version).event(event_name, body).build())

    def publish_event(self, event_name: str, body: Optional[Dict[str, Any]]) -> bool:
        """Send an event only if the remote peer subscribed to it. Returns True if sent."""
        if not self.subscriptions.is_subscribed(event_name):
            return False
        self.send_event(event_name, body)
        return True

    def respond_command(self, request_id: Optional[str], body: Dict[str, Any]) -> None:
        self.send_message(FrameBuilder(self.version).response(request_id, body).build())

    def disconnect(self) -> None:
        self.t.stop()

    # ---- transport callbacks ----
    def _on_transport_message(self, raw: bytes) -> None:
        try:
            self.receive(raw)
        except ProtocolError as e:
            self._report(e)

    def _on_transport_close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("disconnected")
        self.observers.emit(Notice.DISCONNECT, ConnectionNotice(self))

    def _on_transport_error(self, error: BaseException) -> None:
        self._report(error)

    def _report(self, error: BaseException) -> None:
        if self.observers.has(Notice.ERROR):
            self.observers.emit(Notice.ERROR, ErrorNotice(self, error))
        else:
            logger.error("unhandled connection error: %r", error)
