"""Polling session - one screen subscription's refresh loop and state.

State machine::

    Loading --ok--> Success --fail--> Success (stale, previous data kept)
       |              ^
       +--fail--> Error --ok--+

A single asyncio task runs fetch, publish, then waits for the interval (or
an explicit refresh). Fetches never overlap and never pile up when the
cluster is slow, because the next wait only starts after a fetch returns.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Generic, TypeVar

from kubedash.models.state.poll_state import LOADING, Error, PollState, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetch = Callable[[], Awaitable[T]]
Subscriber = Callable[[PollState[T]], None]
Unsubscribe = Callable[[], None]


def error_message(error: BaseException) -> str:
    return str(error).strip() or type(error).__name__


class SubscriberSet(Generic[T]):
    """Callbacks notified on every published state."""

    def __init__(self, owner: str) -> None:
        self._owner = owner
        self._callbacks: list[Subscriber[T]] = []

    def add(self, callback: Subscriber[T]) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            with suppress(ValueError):
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, state: PollState[T]) -> None:
        for callback in list(self._callbacks):
            try:
                callback(state)
            except Exception:
                logger.exception("Subscriber of %s failed", self._owner)

    def __len__(self) -> int:
        return len(self._callbacks)


class PollingSession(Generic[T]):
    """Periodically runs ``fetch`` and publishes PollState changes.

    Args:
        fetch: Coroutine function returning fresh data.
        interval: Seconds to wait after a fetch completes. None fetches once
            and then only on ``refresh()``.
        name: Label used in logs and task names.
        max_stale_failures: After a success, how many consecutive failures
            are tolerated before an Error replaces the stale data. None keeps
            stale data indefinitely.
    """

    def __init__(
        self,
        fetch: Fetch[T],
        interval: float | None,
        *,
        name: str = "poll",
        max_stale_failures: int | None = None,
    ) -> None:
        if interval is not None and interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        if max_stale_failures is not None and max_stale_failures < 1:
            raise ValueError("max_stale_failures must be at least 1")
        self._fetch = fetch
        self.interval = interval
        self.name = name
        self.max_stale_failures = max_stale_failures
        self._state: PollState[T] = LOADING
        self._subscribers: SubscriberSet[T] = SubscriberSet(name)
        self._task: asyncio.Task[None] | None = None
        self._wake = asyncio.Event()
        self._closed = True
        self.consecutive_failures = 0
        self.last_error: str | None = None

    # ------------------------------------------------------------------
    # observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> PollState[T]:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_stale(self) -> bool:
        """Showing a previous success while the latest fetches fail."""
        return isinstance(self._state, Success) and self.consecutive_failures > 0

    def subscribe(self, callback: Subscriber[T]) -> Unsubscribe:
        """Register ``callback``; it is called right away with the current state."""
        unsubscribe = self._subscribers.add(callback)
        try:
            callback(self._state)
        except Exception:
            logger.exception("Subscriber of %s failed", self.name)
        return unsubscribe

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Publish Loading and begin polling. No-op while already running."""
        if self.is_running:
            return
        self._closed = False
        self.consecutive_failures = 0
        self.last_error = None
        self._wake = asyncio.Event()
        if self._state != LOADING:
            self._publish(LOADING)
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"poll:{self.name}"
        )

    def refresh(self) -> None:
        """Skip the remaining wait and fetch now."""
        self._wake.set()

    def stop(self) -> None:
        """Cancel the loop; no callback fires after this returns."""
        self._closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Stop and wait for the loop task to finish unwinding."""
        task = self._task
        self.stop()
        if task is not None:
            with suppress(asyncio.CancelledError):
                await task

    # ------------------------------------------------------------------
    # loop
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        while not self._closed:
            self._wake.clear()
            await self._poll_once()
            if self._closed:
                break
            with suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval)

    async def _poll_once(self) -> None:
        """Run one fetch and apply its outcome to the state machine."""
        try:
            data = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._closed:
                self._on_failure(e)
            return
        if self._closed:
            return
        self.consecutive_failures = 0
        self.last_error = None
        self._publish(Success(data))

    def _on_failure(self, error: Exception) -> None:
        message = error_message(error)
        self.consecutive_failures += 1
        self.last_error = message

        if isinstance(self._state, Success):
            limit = self.max_stale_failures
            if limit is not None and self.consecutive_failures >= limit:
                logger.warning(
                    "%s failed %d times in a row, dropping stale data: %s",
                    self.name,
                    self.consecutive_failures,
                    message,
                )
                self._publish(Error(message))
            else:
                logger.debug("%s refresh failed, keeping previous data: %s", self.name, message)
            return

        logger.warning("%s fetch failed: %s", self.name, message)
        self._publish(Error(message))

    def _publish(self, state: PollState[T]) -> None:
        if self._closed:
            return
        self._state = state
        self._subscribers.notify(state)
