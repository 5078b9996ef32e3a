"""
Log monitoring for mclog.

Tails a Minecraft client log file and publishes parsed events.
"""

from .classifier import LineCategory, LineClassifier
from .cursor import ReadCursor, split_lines
from .extractor import LineRecord, SessionState, StateExtractor
from .monitor import EmptyPathError, LogMonitor
from .sanitizer import sanitize

__all__ = [
    "EmptyPathError",
    "LineCategory",
    "LineClassifier",
    "LineRecord",
    "LogMonitor",
    "ReadCursor",
    "SessionState",
    "StateExtractor",
    "sanitize",
    "split_lines",
]
