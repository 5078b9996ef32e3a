"""Session state derived from log line content."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from ..events.base import (
    BaseEvent,
    ServerConnectedEvent,
    ServerDisconnectedEvent,
    UserChangedEvent,
)
from ..logger import logger
from ..profiles import ClientMarkers
from .classifier import LineCategory

# Length of the "[HH:MM:SS]" stamp that prefixes every client log line
CONNECT_STAMP_LENGTH = 10


class LineRecord(BaseModel):
    """A line kept for synchronous queries, with the time it was processed."""

    message: Optional[str] = None
    timestamp: Optional[datetime] = None


class SessionState(BaseModel):
    """What the log says about the client right now."""

    user: Optional[str] = None
    server: Optional[str] = None
    port: Optional[str] = None
    last_connect_marker: Optional[str] = None
    latest_chat: LineRecord = Field(default_factory=LineRecord)
    latest_log: LineRecord = Field(default_factory=LineRecord)


class StateExtractor:
    """Updates session state from classified lines.

    consume() returns the session events a line implies. The caller decides
    whether to publish them; during catch-up they are dropped and only the
    state change is kept.
    """

    def __init__(self, markers: ClientMarkers):
        self.markers = markers
        self.state = SessionState()

    def reset(self) -> None:
        self.state = SessionState()

    def consume(self, line: str, category: Optional[LineCategory]) -> List[BaseEvent]:
        events: List[BaseEvent] = []
        state = self.state
        markers = self.markers

        if category == LineCategory.INFO:
            user = self._text_after(line, markers.setting_user)
            if user is None:
                user = self._text_after(line, markers.switched_account)
            if user is not None:
                state.user = user
                logger.debug(f"User set to {user}")
                events.append(UserChangedEvent(user=user))

            target = self._text_after(line, markers.connecting)
            if target is not None:
                events.extend(self._connect(line, target))

            if markers.connection_closed and markers.connection_closed in line:
                state.last_connect_marker = None
                events.extend(self._disconnect())

            if markers.stopping in line:
                if state.server is not None:
                    state.last_connect_marker = None
                    events.extend(self._disconnect())
                if state.user is not None:
                    state.user = None
                    events.append(UserChangedEvent(user=None))

        now = datetime.now(timezone.utc)
        if category == LineCategory.CHAT:
            state.latest_chat = LineRecord(message=line, timestamp=now)
        state.latest_log = LineRecord(message=line, timestamp=now)

        return events

    def _connect(self, line: str, target: str) -> List[BaseEvent]:
        stamp = line[:CONNECT_STAMP_LENGTH]
        if stamp == self.state.last_connect_marker:
            return []

        events = self._disconnect()

        host, sep, port = target.partition(", ")
        self.state.last_connect_marker = stamp
        self.state.server = host
        self.state.port = port if sep else None
        logger.debug(f"Connected to {host}:{self.state.port}")
        events.append(ServerConnectedEvent(host=self.state.server, port=self.state.port))
        return events

    def _disconnect(self) -> List[BaseEvent]:
        """Leave the current server; no event when none is active."""
        state = self.state
        if state.server is None:
            return []

        event = ServerDisconnectedEvent(host=state.server, port=state.port)
        logger.debug(f"Disconnected from {event.address}")
        state.server = None
        state.port = None
        return [event]

    @staticmethod
    def _text_after(line: str, marker: Optional[str]) -> Optional[str]:
        if not marker:
            return None
        _, found, rest = line.partition(marker)
        return rest if found else None
