"""Event dispatcher - dispatches typed events to registered handlers.

This is a simple event system without persistence.
Handlers run one after another in registration order, so a handler always
sees events in the order the causing lines appear in the log.
"""

import inspect
from typing import Awaitable, Callable, Dict, List, TypeVar, Union

from ..logger import logger
from .base import (
    BaseEvent,
    ChatEvent,
    ChatRawEvent,
    CloseEvent,
    ErrorLogEvent,
    LogEvent,
    RawLineEvent,
    ReadyEvent,
    ServerConnectedEvent,
    ServerDisconnectedEvent,
    UserChangedEvent,
)
from .types import EventType

# Generic type variable for event types
EventT = TypeVar("EventT", bound=BaseEvent)

# Generic handler type that can be sync or async for any event type
EventHandler = Union[Callable[[EventT], None], Callable[[EventT], Awaitable[None]]]


class EventDispatcher:
    """Dispatches events to registered handlers.

    Several handlers may subscribe to the same event type. A failing handler
    is logged and skipped; it never stops the remaining handlers.
    """

    def __init__(self):
        """Initialize event dispatcher."""
        self._handlers: Dict[EventType, List[Callable]] = {
            event_type: [] for event_type in EventType
        }

    def on(self, event_type: EventType | str, handler: EventHandler) -> None:
        """Register handler for an event type given as enum member or value."""
        self._handlers[EventType(event_type)].append(handler)

    def off(self, event_type: EventType | str, handler: EventHandler) -> None:
        """Unregister a previously registered handler."""
        handlers = self._handlers[EventType(event_type)]
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event_type: EventType | str) -> int:
        return len(self._handlers[EventType(event_type)])

    # Registration helpers - one per event type for type safety

    def on_ready(self, handler: EventHandler[ReadyEvent]) -> None:
        self.on(EventType.READY, handler)

    def on_close(self, handler: EventHandler[CloseEvent]) -> None:
        self.on(EventType.CLOSE, handler)

    def on_chat(self, handler: EventHandler[ChatEvent]) -> None:
        self.on(EventType.CHAT, handler)

    def on_chat_raw(self, handler: EventHandler[ChatRawEvent]) -> None:
        self.on(EventType.CHAT_RAW, handler)

    def on_log(self, handler: EventHandler[LogEvent]) -> None:
        self.on(EventType.LOG, handler)

    def on_err(self, handler: EventHandler[ErrorLogEvent]) -> None:
        self.on(EventType.ERR, handler)

    def on_raw(self, handler: EventHandler[RawLineEvent]) -> None:
        self.on(EventType.RAW, handler)

    def on_user(self, handler: EventHandler[UserChangedEvent]) -> None:
        self.on(EventType.USER, handler)

    def on_connect(self, handler: EventHandler[ServerConnectedEvent]) -> None:
        self.on(EventType.CONNECT, handler)

    def on_disconnect(self, handler: EventHandler[ServerDisconnectedEvent]) -> None:
        self.on(EventType.DISCONNECT, handler)

    async def dispatch(self, event: BaseEvent) -> None:
        """Dispatch event to all registered handlers.

        Args:
            event: Event to dispatch
        """
        handlers = list(self._handlers.get(event.event_type, []))

        if not handlers:
            logger.debug(f"No handlers registered for event: {event.event_type}")
            return

        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                handler_name = getattr(handler, "__name__", repr(handler))
                logger.error(
                    f"Handler {handler_name} failed for event {event.event_type}: {e}",
                    exc_info=True,
                )
