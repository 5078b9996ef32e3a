"""Line classification by log level marker."""

from enum import Enum
from typing import Optional

CHAT_MARKER = "/INFO]: [CHAT]"
INFO_MARKER = "/INFO]"
ERROR_MARKERS = ("/ERROR]", "/WARN]", "/FATAL]")


class LineCategory(str, Enum):
    CHAT = "chat"
    INFO = "info"
    ERROR = "error"


class LineClassifier:
    """Classifies log lines, remembering the last resolved category.

    Lines without a level marker (stack traces, wrapped output) inherit the
    category of the line that started them.
    """

    def __init__(self):
        self.last_category: Optional[LineCategory] = None

    def classify(self, line: str) -> Optional[LineCategory]:
        if CHAT_MARKER in line:
            self.last_category = LineCategory.CHAT
        elif INFO_MARKER in line:
            self.last_category = LineCategory.INFO
        elif any(marker in line for marker in ERROR_MARKERS):
            self.last_category = LineCategory.ERROR
        return self.last_category

    def reset(self) -> None:
        self.last_category = None
