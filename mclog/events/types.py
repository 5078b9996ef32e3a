"""Event type definitions."""

from enum import Enum


class EventType(str, Enum):
    """All event types published by a log monitor."""

    # Lifecycle events
    READY = "ready"
    CLOSE = "close"

    # Line events
    CHAT = "chat"
    CHAT_RAW = "chat_raw"
    LOG = "log"
    ERR = "err"
    RAW = "raw"

    # Session events derived from line content
    USER = "user"
    CONNECT = "connect"
    DISCONNECT = "disconnect"
