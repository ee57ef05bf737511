"""Tests for PollingSession state transitions and lifecycle."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from kubedash.controllers.cluster.provider import ProviderError
from kubedash.models.state.poll_state import LOADING, Error, PollState, Success
from kubedash.polling.session import PollingSession, SubscriberSet, error_message


class ScriptedFetch:
    """Fetch returning (or raising) queued outcomes, repeating the last one."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0
        self.gate: asyncio.Event | None = None
        self.active = 0
        self.max_active = 0

    async def __call__(self) -> Any:
        self.calls += 1
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(0)
            outcome = self.outcomes[0] if len(self.outcomes) == 1 else self.outcomes.pop(0)
        finally:
            self.active -= 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def _recorder() -> tuple[list[PollState[Any]], Callable[[PollState[Any]], None]]:
    states: list[PollState[Any]] = []
    return states, states.append


class TestErrorMessage:
    def test_uses_text_or_type_name(self) -> None:
        assert error_message(ProviderError(" forbidden ")) == "forbidden"
        assert error_message(TimeoutError()) == "TimeoutError"


class TestSubscriberSet:
    def test_failing_subscriber_does_not_block_others(self) -> None:
        subscribers: SubscriberSet[int] = SubscriberSet("test")
        received: list[PollState[int]] = []

        def broken(state: PollState[int]) -> None:
            raise RuntimeError("render failed")

        subscribers.add(broken)
        unsubscribe = subscribers.add(received.append)
        subscribers.notify(Success(1))
        unsubscribe()
        unsubscribe()
        subscribers.notify(Success(2))

        assert received == [Success(1)]
        assert len(subscribers) == 1


class TestPollingSessionConstruction:
    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(ValueError):
            PollingSession(ScriptedFetch(1), 0)

    def test_rejects_invalid_stale_limit(self) -> None:
        with pytest.raises(ValueError):
            PollingSession(ScriptedFetch(1), 1.0, max_stale_failures=0)

    def test_subscribe_receives_current_state(self) -> None:
        session = PollingSession(ScriptedFetch(1), None)
        states, record = _recorder()
        session.subscribe(record)
        assert states == [LOADING]


class TestPollingSessionTransitions:
    """Loading / Success / Error transitions."""

    @pytest.mark.asyncio
    async def test_loading_to_success(self, wait_until: Callable[..., Any]) -> None:
        session = PollingSession(ScriptedFetch(["web-1"]), None)
        states, record = _recorder()
        session.subscribe(record)

        session.start()
        await wait_until(lambda: isinstance(session.state, Success))
        session.stop()

        assert states == [LOADING, Success(["web-1"])]

    @pytest.mark.asyncio
    async def test_first_failure_is_error(self, wait_until: Callable[..., Any]) -> None:
        session = PollingSession(ScriptedFetch(ProviderError("forbidden")), None)

        session.start()
        await wait_until(lambda: isinstance(session.state, Error))
        session.stop()

        assert session.state == Error("forbidden")
        assert session.last_error == "forbidden"
        assert not session.is_stale

    @pytest.mark.asyncio
    async def test_failure_after_success_keeps_data(self, wait_until: Callable[..., Any]) -> None:
        """A refresh failure after a success keeps the previous data, marked stale."""
        fetch = ScriptedFetch(["a"], ProviderError("timeout"))
        session = PollingSession(fetch, None)
        states, record = _recorder()
        session.subscribe(record)

        session.start()
        await wait_until(lambda: fetch.calls == 1 and isinstance(session.state, Success))
        session.refresh()
        await wait_until(lambda: session.consecutive_failures == 1)
        session.stop()

        assert session.state == Success(["a"])
        assert session.is_stale
        assert session.last_error == "timeout"
        assert states == [LOADING, Success(["a"])]

    @pytest.mark.asyncio
    async def test_recovery_clears_staleness(self, wait_until: Callable[..., Any]) -> None:
        fetch = ScriptedFetch(["a"], ProviderError("timeout"), ["b"])
        session = PollingSession(fetch, None)

        session.start()
        await wait_until(lambda: fetch.calls == 1 and isinstance(session.state, Success))
        session.refresh()
        await wait_until(lambda: session.is_stale)
        session.refresh()
        await wait_until(lambda: session.state == Success(["b"]))
        session.stop()

        assert not session.is_stale
        assert session.last_error is None

    @pytest.mark.asyncio
    async def test_stale_limit_replaces_data_with_error(
        self, wait_until: Callable[..., Any]
    ) -> None:
        fetch = ScriptedFetch(["a"], ProviderError("timeout"))
        session = PollingSession(fetch, None, max_stale_failures=2)

        session.start()
        await wait_until(lambda: fetch.calls == 1 and isinstance(session.state, Success))
        session.refresh()
        await wait_until(lambda: session.consecutive_failures == 1)
        assert isinstance(session.state, Success)
        session.refresh()
        await wait_until(lambda: isinstance(session.state, Error))
        session.stop()

        assert session.state == Error("timeout")

    @pytest.mark.asyncio
    async def test_error_then_success(self, wait_until: Callable[..., Any]) -> None:
        fetch = ScriptedFetch(ProviderError("forbidden"), ["a"])
        session = PollingSession(fetch, None)

        session.start()
        await wait_until(lambda: isinstance(session.state, Error))
        session.refresh()
        await wait_until(lambda: isinstance(session.state, Success))
        session.stop()

        assert session.consecutive_failures == 0


class TestPollingSessionLifecycle:
    """Scheduling, stop and restart."""

    @pytest.mark.asyncio
    async def test_interval_polls_repeatedly_without_overlap(
        self, wait_until: Callable[..., Any]
    ) -> None:
        fetch = ScriptedFetch(["a"])
        session = PollingSession(fetch, 0.01)

        session.start()
        await wait_until(lambda: fetch.calls >= 3)
        await session.aclose()

        assert fetch.max_active == 1
        assert not session.is_running

    @pytest.mark.asyncio
    async def test_interval_none_fetches_once(self, wait_until: Callable[..., Any]) -> None:
        fetch = ScriptedFetch(["a"])
        session = PollingSession(fetch, None)

        session.start()
        await wait_until(lambda: isinstance(session.state, Success))
        await asyncio.sleep(0.05)
        assert fetch.calls == 1

        session.refresh()
        await wait_until(lambda: fetch.calls == 2)
        session.stop()

    @pytest.mark.asyncio
    async def test_no_publish_after_stop(self) -> None:
        fetch = ScriptedFetch(["late"])
        fetch.gate = asyncio.Event()
        session = PollingSession(fetch, None)
        states, record = _recorder()
        session.subscribe(record)

        session.start()
        await asyncio.sleep(0.01)
        session.stop()
        fetch.gate.set()
        await asyncio.sleep(0.02)

        assert states == [LOADING]
        assert not session.is_running

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, wait_until: Callable[..., Any]) -> None:
        fetch = ScriptedFetch(["a"])
        fetch.gate = asyncio.Event()
        session = PollingSession(fetch, None)

        session.start()
        session.start()
        await asyncio.sleep(0.01)
        fetch.gate.set()
        await wait_until(lambda: isinstance(session.state, Success))
        session.stop()

        assert fetch.calls == 1

    @pytest.mark.asyncio
    async def test_restart_publishes_loading(self, wait_until: Callable[..., Any]) -> None:
        session = PollingSession(ScriptedFetch(["a"]), None)
        states, record = _recorder()
        session.subscribe(record)

        session.start()
        await wait_until(lambda: isinstance(session.state, Success))
        session.stop()
        session.start()
        await wait_until(lambda: len(states) == 4)
        session.stop()

        assert states == [LOADING, Success(["a"]), LOADING, Success(["a"])]
