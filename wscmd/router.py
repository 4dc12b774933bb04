from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Union

from . import constants as C
from .message import Frame, MessagePurpose
from .notifications import (
    CommandRequest,
    FrameContext,
    LegacyCommandRequest,
    Notice,
    SubscriptionChange,
)
from .subscriptions import SubscriptionTable

if TYPE_CHECKING:
    from .connection import Connection

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]

class Observers:
    """Handlers per notification kind, called in registration order."""

    def __init__(self):
        self._handlers: Dict[Notice, List[Handler]] = {}

    def on(self, kind: Union[Notice, str], handler: Handler) -> None:
        self._handlers.setdefault(Notice(kind), []).append(handler)

    def off(self, kind: Union[Notice, str], handler: Handler) -> None:
        handlers = self._handlers.get(Notice(kind), [])
        if handler in handlers:
            handlers.remove(handler)

    def has(self, kind: Union[Notice, str]) -> bool:
        return bool(self._handlers.get(Notice(kind)))

    def emit(self, kind: Notice, notice: Any) -> None:
        # copy: handlers may (un)register while we iterate
        for handler in list(self._handlers.get(kind, ())):
            handler(notice)


class Router:

    # Notes:
    # - one typed notification (at most) then one generic "message", per frame
    # - (un)subscribe goes through the table; repeats are absorbed silently
    # - commandRequest has two shapes: commandLine, or legacy name/overload/input
    # - no lock is held while observers run; they may send from inside a callback

    def __init__(self, connection: "Connection", subscriptions: SubscriptionTable, observers: Observers):
        self.connection = connection
        self.subscriptions = subscriptions
        self.observers = observers

    def dispatch(self, frame: Frame) -> None:
        ctx = FrameContext(self.connection, frame)
        try:
            self._route(ctx)
        finally:
            # "message" follows every frame, even when a typed handler raised
            self.observers.emit(Notice.MESSAGE, ctx)

    def _route(self, ctx: FrameContext) -> None:
        frame = ctx.frame
        purpose = frame.header.purpose
        body = frame.body

        if purpose in (MessagePurpose.SUBSCRIBE, MessagePurpose.UNSUBSCRIBE):
            self._subscription(ctx, purpose, body.get(C.EVENT_NAME))

        elif purpose == MessagePurpose.COMMAND_REQUEST:
            command_line = body.get(C.COMMAND_LINE)
            if isinstance(command_line, str) and command_line:
                self.observers.emit(Notice.COMMAND, CommandRequest(
                    self.connection, frame, command_line=command_line))
            else:
                self.observers.emit(Notice.COMMAND_LEGACY, LegacyCommandRequest(
                    self.connection, frame,
                    command_name=body.get("name"),
                    overload=body.get("overload"),
                    input=body.get("input"),
                ))

        else:
            self.observers.emit(Notice.CUSTOM_FRAME, ctx)

    def _subscription(self, ctx: FrameContext, purpose: MessagePurpose, event_name: Any) -> None:
        if not isinstance(event_name, str):
            logger.debug("%s without eventName ignored", purpose)
            return
        if purpose == MessagePurpose.SUBSCRIBE:
            changed, kind = self.subscriptions.subscribe(event_name), Notice.SUBSCRIBE
        else:
            changed, kind = self.subscriptions.unsubscribe(event_name), Notice.UNSUBSCRIBE
        if not changed:
            logger.debug("duplicate %s for %s absorbed", purpose, event_name)
            return
        logger.debug("%s %s", purpose, event_name)
        self.observers.emit(kind, SubscriptionChange(ctx.connection, ctx.frame, event_name=event_name))
