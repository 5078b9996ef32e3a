"""Tracks how much of the log file has been processed."""

from typing import List


def split_lines(content: str) -> List[str]:
    """Split file content on line endings, normalizing CRLF first.

    The result always has at least one element; the last one is the text
    after the final separator and may be a line still being written.
    """
    return content.replace("\r\n", "\n").split("\n")


class ReadCursor:
    """Line pointer into the target file plus the last observed byte size."""

    def __init__(self):
        self.lines_consumed = 0
        self.last_size = 0

    def is_truncated(self, lines: List[str]) -> bool:
        """True when the file now has no more lines than were already consumed."""
        return self.lines_consumed >= len(lines)

    def unseen(self, lines: List[str]) -> List[str]:
        """Complete lines not yet consumed; the trailing segment is withheld."""
        return lines[self.lines_consumed : len(lines) - 1]

    def advance(self, lines: List[str]) -> None:
        self.lines_consumed = max(len(lines) - 1, 0)

    def reset(self) -> None:
        self.lines_consumed = 0
        self.last_size = 0
