"""Base event model for all events."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .types import EventType


class BaseEvent(BaseModel):
    """Base class for all events."""

    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Lifecycle events
class ReadyEvent(BaseEvent):
    """Fired once the first pass over the log after (re)opening has completed."""

    event_type: EventType = EventType.READY


class CloseEvent(BaseEvent):
    """Fired when the monitor has been closed."""

    event_type: EventType = EventType.CLOSE


# Line events
class ChatEvent(BaseEvent):
    """Fired for a chat line, with formatting codes removed."""

    event_type: EventType = EventType.CHAT
    message: str = Field(..., description="Sanitized chat message")


class ChatRawEvent(BaseEvent):
    """Fired for a chat line, exactly as written by the client."""

    event_type: EventType = EventType.CHAT_RAW
    line: str = Field(..., description="Raw log line")


class LogEvent(BaseEvent):
    """Fired for info-level lines, chat included."""

    event_type: EventType = EventType.LOG
    line: str = Field(..., description="Raw log line")


class ErrorLogEvent(BaseEvent):
    """Fired for error, warning and fatal lines."""

    event_type: EventType = EventType.ERR
    line: str = Field(..., description="Raw log line")


class RawLineEvent(BaseEvent):
    """Fired for every new line."""

    event_type: EventType = EventType.RAW
    line: str = Field(..., description="Raw log line")


# Session events
class UserChangedEvent(BaseEvent):
    """Fired when the logged in user changes; user is None on logout."""

    event_type: EventType = EventType.USER
    user: Optional[str] = Field(..., description="Username, or None when cleared")


class ServerConnectedEvent(BaseEvent):
    """Fired when the client connects to a server."""

    event_type: EventType = EventType.CONNECT
    host: Optional[str] = Field(..., description="Server host")
    port: Optional[str] = Field(..., description="Server port")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class ServerDisconnectedEvent(BaseEvent):
    """Fired when the client leaves a server."""

    event_type: EventType = EventType.DISCONNECT
    host: Optional[str] = Field(..., description="Server host")
    port: Optional[str] = Field(..., description="Server port")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"
