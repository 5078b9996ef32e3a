"""Polling tailer for a Minecraft client's latest.log."""

import asyncio
from typing import List, Optional

import aiofiles
from aiofiles import os as aioos

from ..config import Settings
from ..events.base import (
    BaseEvent,
    ChatEvent,
    ChatRawEvent,
    CloseEvent,
    ErrorLogEvent,
    LogEvent,
    RawLineEvent,
    ReadyEvent,
)
from ..events.dispatcher import EventDispatcher
from ..logger import log_exception, logger
from ..profiles import (
    Profile,
    default_path,
    expand_home,
    markers_for,
    parse_profile,
)
from .classifier import LineCategory, LineClassifier
from .cursor import ReadCursor, split_lines
from .extractor import LineRecord, StateExtractor
from .sanitizer import sanitize

DEFAULT_UPDATE_INTERVAL = 50  # milliseconds


class EmptyPathError(ValueError):
    """Raised when an explicit log path is empty."""


class LogMonitor:
    """Tails one log file and publishes what happens in it.

    Every change to the target (profile, path, interval, from-beginning flag)
    reopens the monitor: the poll task is cancelled, all state is cleared,
    existing content is skipped silently unless reading from the beginning,
    and a new poll task starts with an immediate tick.

    Usage:
        monitor = LogMonitor()
        monitor.event_dispatcher.on_chat(print_chat)
        await monitor.set_profile("lunar")
        ...
        await monitor.close()
    """

    def __init__(
        self,
        event_dispatcher: Optional[EventDispatcher] = None,
        profile: Profile | str = Profile.VANILLA,
        path: Optional[str] = None,
        from_beginning: bool = False,
        update_interval: int = DEFAULT_UPDATE_INTERVAL,
    ):
        """Initialize log monitor without starting it.

        Args:
            event_dispatcher: Dispatcher to publish to; a private one is created if omitted
            profile: Client that writes the log
            path: Explicit log path overriding the profile default
            from_beginning: Publish lines already in the file when opening
            update_interval: Poll interval in milliseconds
        """
        self.event_dispatcher = event_dispatcher or EventDispatcher()

        self._profile: Optional[Profile] = None
        self._path: Optional[str] = None
        self._from_beginning = from_beginning
        self._update_interval = self._check_interval(update_interval)

        self._apply_profile(profile)
        if path is not None:
            self._apply_path(path)

        self._classifier = LineClassifier()
        self._cursor = ReadCursor()
        self._extractor = StateExtractor(markers_for(self._profile))

        self._task: Optional[asyncio.Task] = None
        self._open = False
        self._ready = False
        # Bumped on every reset; reads started under an older generation are dropped
        self._generation = 0
        # Serializes reconfiguration so only one poll task is ever live
        self._reconfigure_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, event_dispatcher: Optional[EventDispatcher] = None
    ) -> "LogMonitor":
        return cls(
            event_dispatcher=event_dispatcher,
            profile=settings.client,
            path=settings.dir,
            from_beginning=settings.from_beginning,
            update_interval=settings.update_interval,
        )

    def __repr__(self) -> str:
        profile = self._profile.value if self._profile else None
        return f"LogMonitor(profile={profile}, path={self._path!r})"

    # Configuration

    async def set_profile(self, name: Profile | str, skip_refresh: bool = False) -> None:
        """Follow the default log of a known client.

        Raises:
            InvalidProfileError: If the client is unknown
        """
        self._apply_profile(name)
        self._extractor.markers = markers_for(self._profile)
        if not skip_refresh:
            await self.refresh()

    async def set_path(self, path: str, skip_refresh: bool = False) -> None:
        """Follow an explicit log file; "HOME" expands to the home directory.

        Raises:
            EmptyPathError: If the path is empty
        """
        self._apply_path(path)
        if not skip_refresh:
            await self.refresh()

    async def set_update_interval(self, interval: int) -> None:
        """Change the poll interval (milliseconds)."""
        self._update_interval = self._check_interval(interval)
        await self.refresh()

    async def set_from_beginning(self, from_beginning: bool) -> None:
        self._from_beginning = from_beginning
        await self.refresh()

    async def start(self) -> None:
        """Open the monitor with the current configuration."""
        await self.refresh()

    async def refresh(self) -> None:
        """Reopen the target file from scratch."""
        async with self._reconfigure_lock:
            await self._cancel_task()
            self._reset()
            self._open = True

            if not self._from_beginning:
                await self._skip_existing()

            logger.info(
                f"Watching {self._path} ({self._profile.value}, every {self._update_interval}ms)"
            )
            self._task = asyncio.create_task(self._poll_loop(self._generation))

    async def close(self) -> None:
        """Stop polling, forget all state and publish a close event."""
        async with self._reconfigure_lock:
            await self._cancel_task()
            self._reset()
        logger.info(f"Stopped watching {self._path}")
        await self.event_dispatcher.dispatch(CloseEvent())

    # Queries

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def update_interval(self) -> int:
        return self._update_interval

    @property
    def from_beginning(self) -> bool:
        return self._from_beginning

    @property
    def current_user(self) -> Optional[str]:
        return self._extractor.state.user

    @property
    def current_server(self) -> Optional[str]:
        return self._extractor.state.server

    @property
    def current_port(self) -> Optional[str]:
        return self._extractor.state.port

    def latest_chat(self) -> LineRecord:
        """Most recent chat line with formatting codes removed."""
        raw = self._extractor.state.latest_chat
        if raw.message is None:
            return raw.model_copy()
        return LineRecord(message=sanitize(raw.message), timestamp=raw.timestamp)

    def latest_chat_raw(self) -> LineRecord:
        return self._extractor.state.latest_chat.model_copy()

    def latest_log(self) -> LineRecord:
        return self._extractor.state.latest_log.model_copy()

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_open(self) -> bool:
        return self._open

    # Internals

    def _apply_profile(self, name: Profile | str) -> None:
        profile = parse_profile(name)
        self._profile = profile
        self._path = str(default_path(profile))

    def _apply_path(self, path: str) -> None:
        if not path:
            raise EmptyPathError("Log path cannot be empty.")
        self._profile = self._profile or Profile.CUSTOM
        self._path = expand_home(str(path))

    @staticmethod
    def _check_interval(interval: int) -> int:
        if interval <= 0:
            raise ValueError(f"Update interval must be positive, got {interval}")
        return interval

    def _reset(self) -> None:
        self._generation += 1
        self._open = False
        self._ready = False
        self._cursor.reset()
        self._classifier.reset()
        self._extractor.reset()

    def _is_current(self, generation: int) -> bool:
        return self._open and generation == self._generation

    async def _cancel_task(self) -> None:
        task, self._task = self._task, None
        # Called from a handler running inside the poll loop: the loop notices
        # the generation change and exits by itself.
        if task is None or task.done() or task is asyncio.current_task():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _read_lines(self, path: str) -> List[str]:
        async with aiofiles.open(
            path, "r", encoding="utf-8", errors="replace", newline=""
        ) as f:
            content = await f.read()
        return split_lines(content)

    async def _skip_existing(self) -> None:
        """Consume the current content silently so only new lines are published."""
        generation, path = self._generation, self._path
        try:
            lines = await self._read_lines(path)
        except OSError as e:
            logger.debug(f"Cannot read {path} on open, starting from line 0: {e}")
            return

        if path == self._path and self._is_current(generation):
            self._catch_up(lines)

    def _catch_up(self, lines: List[str]) -> None:
        for line in self._cursor.unseen(lines):
            self._extractor.consume(line, self._classifier.classify(line))
        self._cursor.advance(lines)

    async def _poll_loop(self, generation: int) -> None:
        while self._is_current(generation):
            await self._tick(generation)
            await asyncio.sleep(self._update_interval / 1000)

    @log_exception("Poll tick failed for {self}")
    async def _tick(self, generation: int) -> None:
        """Check the file size and process new lines if it changed."""
        if not self._is_current(generation):
            return

        path = self._path
        try:
            size = (await aioos.stat(path)).st_size
        except OSError as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return

        if size == self._cursor.last_size:
            return

        try:
            lines = await self._read_lines(path)
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            return

        if path != self._path or not self._is_current(generation):
            logger.debug(f"Target changed while reading {path}, discarding")
            return

        await self._process(lines, generation)
        if self._is_current(generation):
            self._cursor.last_size = size

    async def _process(self, lines: List[str], generation: int) -> None:
        if self._cursor.is_truncated(lines):
            logger.info(f"Log file {self._path} truncated or replaced, starting over")
            self._cursor.reset()
            self._classifier.reset()
            self._extractor.reset()
            self._ready = False
            if not self._from_beginning:
                self._catch_up(lines)

        for line in self._cursor.unseen(lines):
            await self._publish_line(line, generation)
            if not self._is_current(generation):
                return
            self._cursor.lines_consumed += 1

        if not self._ready:
            self._ready = True
            logger.info(f"Ready, {self._cursor.lines_consumed} lines in {self._path}")
            await self.event_dispatcher.dispatch(ReadyEvent())

    async def _publish_line(self, line: str, generation: int) -> None:
        category = self._classifier.classify(line)
        events: List[BaseEvent] = self._extractor.consume(line, category)

        match category:
            case LineCategory.CHAT:
                events.append(ChatEvent(message=sanitize(line)))
                events.append(ChatRawEvent(line=line))
                events.append(LogEvent(line=line))
            case LineCategory.INFO:
                events.append(LogEvent(line=line))
            case LineCategory.ERROR:
                events.append(ErrorLogEvent(line=line))
        events.append(RawLineEvent(line=line))

        for event in events:
            if not self._is_current(generation):
                return
            await self.event_dispatcher.dispatch(event)
