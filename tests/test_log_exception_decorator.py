"""
Tests for the log_exception decorator.

Tests cover:
- Exception logging with sync and async functions
- Parameter name binding and prefix substitution
- Default return values
"""

import asyncio

import pytest

from mclog.logger import log_exception


class TestBasicExceptionLogging:
    """Test basic exception logging functionality."""

    @pytest.mark.asyncio
    async def test_sync_function_with_prefix(self, caplog):
        """Test sync function logs exception with prefix and returns None."""

        @log_exception("ParseLine")
        def parse_with_error():
            raise ValueError("bad line")

        result = parse_with_error()

        assert result is None
        assert "ParseLine: ValueError: bad line" in caplog.text
        assert "ERROR" in caplog.text

    @pytest.mark.asyncio
    async def test_async_function_with_prefix(self, caplog):
        """Test async function logs exception with prefix and returns None."""

        @log_exception("Poll tick failed")
        async def tick_with_error():
            await asyncio.sleep(0.01)
            raise OSError("disk went away")

        result = await tick_with_error()

        assert result is None
        assert "Poll tick failed: OSError: disk went away" in caplog.text

    @pytest.mark.asyncio
    async def test_successful_execution_no_log(self, caplog):
        """Test that a successful call logs nothing and returns its value."""

        @log_exception("Tick")
        async def tick_ok():
            return 3

        assert await tick_ok() == 3
        assert "ERROR" not in caplog.text

    def test_cancelled_error_is_not_swallowed(self):
        """Test that task cancellation still propagates through the wrapper."""

        @log_exception("Tick")
        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(cancelled())


class TestParameterBinding:
    """Test argument formatting in log records."""

    def test_positional_args_with_names(self, caplog):
        """Test positional args are logged with parameter names."""

        @log_exception()
        def read_log(path: str, lines: int):
            raise RuntimeError("boom")

        read_log("latest.log", 3)

        assert "[path='latest.log', lines=3]" in caplog.text

    def test_default_values_shown(self, caplog):
        """Test that defaults are included in the logged arguments."""

        @log_exception()
        def read_log(path: str, encoding: str = "utf-8"):
            raise RuntimeError("boom")

        read_log("latest.log")

        assert "encoding='utf-8'" in caplog.text

    def test_binding_failure_warns(self, caplog):
        """Test that arguments that do not bind produce a warning."""

        @log_exception()
        def single(param1: str):
            raise RuntimeError("boom")

        single("a", "b")

        assert "Failed to bind arguments for function" in caplog.text
        assert "args=('a', 'b')" in caplog.text


class TestPrefixFormatting:
    """Test prefix parameter substitution."""

    def test_single_parameter_in_prefix(self, caplog):
        """Test that braces are filled from bound arguments."""

        @log_exception("Reading {path}")
        def read_log(path: str):
            raise FileNotFoundError(path)

        read_log("latest.log")

        assert "Reading latest.log: FileNotFoundError" in caplog.text

    def test_missing_parameter_in_prefix(self, caplog):
        """Test that an unknown placeholder falls back to the raw prefix."""

        @log_exception("Reading {missing}")
        def read_log(path: str):
            raise FileNotFoundError(path)

        read_log("latest.log")

        assert "Failed to format prefix" in caplog.text
        assert "Reading {missing}: FileNotFoundError" in caplog.text


class TestDefaultReturn:
    """Test the value returned after a swallowed exception."""

    def test_default_return_value(self):
        @log_exception("Count", default_return=0)
        def count_lines():
            raise ValueError("nope")

        assert count_lines() == 0
