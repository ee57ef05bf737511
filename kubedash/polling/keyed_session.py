"""Polling session bound to a reactive key (namespace, kind, node name...)."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from kubedash.models.state.poll_state import LOADING, PollState
from kubedash.polling.session import (
    Fetch,
    PollingSession,
    Subscriber,
    SubscriberSet,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")

_UNSET = object()


class KeyedPollingSession(Generic[K, T]):
    """Replaces its inner session whenever the key changes.

    ``interval`` may be a callable so the cadence can follow the key (a
    nodes screen polls slower than a pods screen).

    The old session is stopped before the new one starts, so results
    fetched for a previous key are never published.
    """

    def __init__(
        self,
        fetch_factory: Callable[[K], Fetch[T]],
        interval: float | None | Callable[[K], float | None],
        *,
        name: str = "keyed-poll",
        max_stale_failures: int | None = None,
    ) -> None:
        self._fetch_factory = fetch_factory
        self.interval = interval
        self.name = name
        self.max_stale_failures = max_stale_failures
        self._key: object = _UNSET
        self._session: PollingSession[T] | None = None
        self._subscribers: SubscriberSet[T] = SubscriberSet(name)
        self._state: PollState[T] = LOADING

    @property
    def key(self) -> K | None:
        return None if self._key is _UNSET else self._key  # type: ignore[return-value]

    @property
    def session(self) -> PollingSession[T] | None:
        return self._session

    @property
    def state(self) -> PollState[T]:
        return self._state

    @property
    def is_stale(self) -> bool:
        return self._session is not None and self._session.is_stale

    def subscribe(self, callback: Subscriber[T]) -> Unsubscribe:
        unsubscribe = self._subscribers.add(callback)
        try:
            callback(self._state)
        except Exception:
            logger.exception("Subscriber of %s failed", self.name)
        return unsubscribe

    def interval_for(self, key: K) -> float | None:
        if callable(self.interval):
            return self.interval(key)
        return self.interval

    def set_key(self, key: K) -> bool:
        """Point the session at ``key``.

        Returns:
            True if a new session was started, False when the key is equal
            to the current one and the running session was kept.
        """
        if self._session is not None and self._session.is_running and key == self._key:
            return False
        self._teardown()
        self._key = key
        session: PollingSession[T] = PollingSession(
            self._fetch_factory(key),
            self.interval_for(key),
            name=f"{self.name}[{key}]",
            max_stale_failures=self.max_stale_failures,
        )
        self._session = session
        session.subscribe(self._forward)
        session.start()
        logger.debug("%s switched to key %r", self.name, key)
        return True

    def _forward(self, state: PollState[T]) -> None:
        self._state = state
        self._subscribers.notify(state)

    def refresh(self) -> None:
        if self._session is not None:
            self._session.refresh()

    def _teardown(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            session.stop()

    def stop(self) -> None:
        self._teardown()

    async def aclose(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.aclose()
