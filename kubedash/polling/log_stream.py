"""Followed pod log stream published as PollState snapshots."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from collections.abc import Awaitable, Callable
from contextlib import suppress

from kubedash.constants.limits import LOG_STREAM_BUFFER_LINES
from kubedash.constants.timeouts import LOG_POLL_INTERVAL, LOG_STREAM_STOP_TIMEOUT
from kubedash.controllers.cluster.provider import LogStreamHandle
from kubedash.models.state.poll_state import LOADING, Error, PollState, Success
from kubedash.polling.session import (
    Subscriber,
    SubscriberSet,
    Unsubscribe,
    error_message,
)

logger = logging.getLogger(__name__)

LogLines = tuple[str, ...]
OpenStream = Callable[[], Awaitable[LogStreamHandle]]


class LogStreamSession:
    """Tails a log stream on a worker thread into a bounded buffer.

    The reader thread appends lines as they arrive; the event loop side
    publishes a snapshot of the buffer at most once per ``interval`` when
    something changed. ``stop()`` closes the stream handle, which unblocks
    the reader.
    """

    def __init__(
        self,
        open_stream: OpenStream,
        *,
        interval: float = LOG_POLL_INTERVAL,
        buffer_lines: int = LOG_STREAM_BUFFER_LINES,
        name: str = "logs",
    ) -> None:
        self._open_stream = open_stream
        self.interval = interval
        self.name = name
        self._lines: deque[str] = deque(maxlen=buffer_lines)
        self._lines_lock = threading.Lock()
        self._version = 0
        self._handle: LogStreamHandle | None = None
        self._reader: threading.Thread | None = None
        self._task: asyncio.Task[None] | None = None
        self._wake = asyncio.Event()
        self._closed = True
        self._state: PollState[LogLines] = LOADING
        self._subscribers: SubscriberSet[LogLines] = SubscriberSet(name)

    @property
    def state(self) -> PollState[LogLines]:
        return self._state

    @property
    def lines(self) -> LogLines:
        with self._lines_lock:
            return tuple(self._lines)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, callback: Subscriber[LogLines]) -> Unsubscribe:
        unsubscribe = self._subscribers.add(callback)
        try:
            callback(self._state)
        except Exception:
            logger.exception("Subscriber of %s failed", self.name)
        return unsubscribe

    def start(self) -> None:
        if self.is_running:
            return
        self._closed = False
        self._wake = asyncio.Event()
        with self._lines_lock:
            self._lines.clear()
            self._version = 0
        self._publish(LOADING)
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"logs:{self.name}"
        )

    def refresh(self) -> None:
        self._wake.set()

    def stop(self) -> None:
        """Close the stream and cancel publishing; idempotent."""
        self._closed = True
        handle, self._handle = self._handle, None
        if handle is not None:
            try:
                handle.close()
            except Exception as e:
                logger.debug("Error closing log stream %s: %s", self.name, e)
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        task = self._task
        reader = self._reader
        self.stop()
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task
        if reader is not None:
            await asyncio.to_thread(reader.join, LOG_STREAM_STOP_TIMEOUT)

    def _read_lines(self, handle: LogStreamHandle) -> None:
        while True:
            try:
                line = handle.readline()
            except Exception as e:
                logger.debug("Log stream %s ended with error: %s", self.name, e)
                return
            if line is None:
                return
            with self._lines_lock:
                self._lines.append(line)
                self._version += 1

    def _close_abandoned(self, opening: asyncio.Future[LogStreamHandle]) -> None:
        """Close a handle whose open finished after the session stopped."""
        if opening.cancelled() or opening.exception() is not None:
            return
        try:
            opening.result().close()
        except Exception as e:
            logger.debug("Error closing abandoned log stream %s: %s", self.name, e)

    async def _run(self) -> None:
        opening = asyncio.ensure_future(self._open_stream())
        try:
            handle = await asyncio.shield(opening)
        except asyncio.CancelledError:
            opening.add_done_callback(self._close_abandoned)
            raise
        except Exception as e:
            logger.warning("Could not open log stream %s: %s", self.name, e)
            self._publish(Error(error_message(e)))
            return

        if self._closed:
            handle.close()
            return
        self._handle = handle
        reader = threading.Thread(
            target=self._read_lines, args=(handle,), name=f"logs-reader:{self.name}", daemon=True
        )
        self._reader = reader
        reader.start()

        published_version = -1
        while not self._closed:
            self._wake.clear()
            reader_done = not reader.is_alive()
            with self._lines_lock:
                version = self._version
            if version != published_version:
                published_version = version
                self._publish(Success(self.lines))
            elif reader_done:
                break
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)

    def _publish(self, state: PollState[LogLines]) -> None:
        if self._closed:
            return
        self._state = state
        self._subscribers.notify(state)
