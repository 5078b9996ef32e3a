"""
Event system for mclog.

Typed events and a dispatcher with per-event-type subscriber lists.
"""

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
from .dispatcher import EventDispatcher
from .types import EventType

__all__ = [
    "BaseEvent",
    "ChatEvent",
    "ChatRawEvent",
    "CloseEvent",
    "ErrorLogEvent",
    "EventDispatcher",
    "EventType",
    "LogEvent",
    "RawLineEvent",
    "ReadyEvent",
    "ServerConnectedEvent",
    "ServerDisconnectedEvent",
    "UserChangedEvent",
]
