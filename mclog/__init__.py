"""
mclog - live events from a Minecraft client's latest.log.

Usage:
    from mclog import EventType, LogMonitor

    monitor = LogMonitor(profile="vanilla")
    monitor.event_dispatcher.on(EventType.CHAT, lambda event: print(event.message))
    await monitor.start()
"""

from .events import EventDispatcher, EventType
from .log_monitor import EmptyPathError, LogMonitor, sanitize
from .profiles import InvalidProfileError, Profile

__all__ = [
    "EmptyPathError",
    "EventDispatcher",
    "EventType",
    "InvalidProfileError",
    "LogMonitor",
    "Profile",
    "sanitize",
]
