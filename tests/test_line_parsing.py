"""Tests for line classification, chat sanitizing and the read cursor."""

import pytest

from mclog.log_monitor.classifier import LineCategory, LineClassifier
from mclog.log_monitor.cursor import ReadCursor, split_lines
from mclog.log_monitor.sanitizer import sanitize


class TestLineClassifier:
    """Test level marker classification."""

    @pytest.fixture
    def classifier(self):
        return LineClassifier()

    def test_chat_line(self, classifier):
        line = "[12:00:02] [Client thread/INFO]: [CHAT] <Steve> hi"
        assert classifier.classify(line) == LineCategory.CHAT

    def test_info_line(self, classifier):
        line = "[12:00:00] [Client thread/INFO]: Setting user: Alex"
        assert classifier.classify(line) == LineCategory.INFO

    @pytest.mark.parametrize("level", ["ERROR", "WARN", "FATAL"])
    def test_error_levels(self, classifier, level):
        line = f"[12:00:03] [Client thread/{level}]: Connection lost"
        assert classifier.classify(line) == LineCategory.ERROR

    def test_chat_tag_without_info_level_is_not_chat(self, classifier):
        """A [CHAT] tag on a warning line is still an error line."""
        line = "[12:00:03] [Client thread/WARN]: [CHAT] something"
        assert classifier.classify(line) == LineCategory.ERROR

    def test_unmarked_line_without_history(self, classifier):
        assert classifier.classify("\tat java.lang.Thread.run") is None

    def test_continuation_lines_inherit_category(self, classifier):
        """Stack trace lines keep the category of the line that started them."""
        classifier.classify("[12:00:03] [Render thread/ERROR]: Exception in thread")
        assert classifier.classify("java.lang.NullPointerException") == LineCategory.ERROR
        assert classifier.classify("\tat net.minecraft.Client.run") == LineCategory.ERROR

        classifier.classify("[12:00:04] [Client thread/INFO]: Back to normal")
        assert classifier.classify("wrapped output") == LineCategory.INFO

    def test_reset_forgets_last_category(self, classifier):
        classifier.classify("[12:00:03] [Client thread/ERROR]: oops")
        classifier.reset()
        assert classifier.classify("continuation") is None


class TestSanitize:
    """Test chat formatting code removal."""

    def test_removes_formatting_codes(self):
        line = "[12:00:02] [Client thread/INFO]: [CHAT] §9PlayerOne: §fHello"
        assert sanitize(line) == "PlayerOne: Hello"

    def test_replacement_character_treated_as_delimiter(self):
        """Logs written in a legacy code page decode the section sign as U+FFFD."""
        line = "[12:00:02] [Client thread/INFO]: [CHAT] �aGreen �rtext"
        assert sanitize(line) == "Green text"

    def test_text_after_first_chat_tag(self):
        """A player typing the chat tag keeps it in their message."""
        line = "[12:00:02] [Client thread/INFO]: [CHAT] <Steve> look [CHAT] here"
        assert sanitize(line) == "<Steve> look [CHAT] here"

    def test_line_without_tag_is_used_whole(self):
        assert sanitize("§cRed alert") == "Red alert"

    def test_trailing_delimiter_removed(self):
        assert sanitize("[CHAT] done§") == "done"

    def test_consecutive_delimiters(self):
        """Each delimiter eats the character after it, even another delimiter's code."""
        assert sanitize("[CHAT] §l§nBold") == "Bold"

    def test_idempotent_without_formatting_codes(self):
        line = "[12:00:02] [Client thread/INFO]: [CHAT] <Steve> plain message"
        once = sanitize(line)
        assert sanitize(once) == once


class TestReadCursor:
    """Test line splitting and unseen range computation."""

    def test_split_normalizes_crlf(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_split_empty_content(self):
        assert split_lines("") == [""]

    def test_last_segment_is_withheld(self):
        cursor = ReadCursor()
        lines = split_lines("first\nsecond\npartial")
        assert cursor.unseen(lines) == ["first", "second"]

        cursor.advance(lines)
        assert cursor.lines_consumed == 2

        lines = split_lines("first\nsecond\npartial line\n")
        assert cursor.unseen(lines) == ["partial line"]

    def test_unchanged_content_has_nothing_unseen(self):
        cursor = ReadCursor()
        lines = split_lines("a\nb\n")
        cursor.advance(lines)
        assert cursor.unseen(lines) == []
        assert not cursor.is_truncated(lines)

    def test_truncation_detected(self):
        cursor = ReadCursor()
        cursor.advance(split_lines("a\nb\nc\n"))

        assert cursor.is_truncated(split_lines("x\n"))
        assert cursor.is_truncated(split_lines("a\nb\nc"))

    def test_reset(self):
        cursor = ReadCursor()
        cursor.advance(split_lines("a\nb\n"))
        cursor.last_size = 4
        cursor.reset()
        assert cursor.lines_consumed == 0
        assert cursor.last_size == 0
