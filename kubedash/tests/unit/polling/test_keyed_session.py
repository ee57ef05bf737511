"""Tests for KeyedPollingSession."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from kubedash.models.state.poll_state import LOADING, PollState, Success
from kubedash.polling.keyed_session import KeyedPollingSession


class GatedFetches:
    """Fetch factory whose fetches wait on a per-key gate."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.started: list[str] = []

    def open(self, key: str) -> None:
        self.gates.setdefault(key, asyncio.Event()).set()

    def __call__(self, key: str) -> Callable[[], Any]:
        async def fetch() -> str:
            self.started.append(key)
            await self.gates.setdefault(key, asyncio.Event()).wait()
            return f"pods in {key}"

        return fetch


class TestKeyedPollingSession:
    """Tests for key switching."""

    def test_initial_state(self) -> None:
        keyed: KeyedPollingSession[str, str] = KeyedPollingSession(GatedFetches(), 1.0)
        assert keyed.key is None
        assert keyed.session is None
        assert keyed.state == LOADING
        assert not keyed.is_stale

    def test_interval_for_callable(self) -> None:
        keyed: KeyedPollingSession[str, str] = KeyedPollingSession(
            GatedFetches(), lambda key: 10.0 if key == "nodes" else 2.0
        )
        assert keyed.interval_for("nodes") == 10.0
        assert keyed.interval_for("pods") == 2.0

    @pytest.mark.asyncio
    async def test_same_key_keeps_session(self) -> None:
        keyed: KeyedPollingSession[str, str] = KeyedPollingSession(GatedFetches(), 1.0)

        assert keyed.set_key("default") is True
        first = keyed.session
        assert keyed.set_key("default") is False
        assert keyed.session is first

        keyed.stop()
        assert keyed.session is None

    @pytest.mark.asyncio
    async def test_previous_key_result_never_published(
        self, wait_until: Callable[..., Any]
    ) -> None:
        """Switching keys drops the in-flight fetch of the old key."""
        fetches = GatedFetches()
        keyed: KeyedPollingSession[str, str] = KeyedPollingSession(fetches, 1.0)
        states: list[PollState[str]] = []
        keyed.subscribe(states.append)

        keyed.set_key("default")
        await wait_until(lambda: fetches.started == ["default"])
        old_session = keyed.session

        assert keyed.set_key("kube-system") is True
        fetches.open("default")
        await asyncio.sleep(0.02)
        fetches.open("kube-system")
        await wait_until(lambda: isinstance(keyed.state, Success))
        await keyed.aclose()

        assert old_session is not None and not old_session.is_running
        assert Success("pods in default") not in states
        assert states[-1] == Success("pods in kube-system")
        assert keyed.key == "kube-system"

    @pytest.mark.asyncio
    async def test_switch_republishes_loading(self, wait_until: Callable[..., Any]) -> None:
        fetches = GatedFetches()
        fetches.open("a")
        keyed: KeyedPollingSession[str, str] = KeyedPollingSession(fetches, 1.0)
        states: list[PollState[str]] = []
        keyed.subscribe(states.append)

        keyed.set_key("a")
        await wait_until(lambda: isinstance(keyed.state, Success))
        keyed.set_key("b")

        assert keyed.state == LOADING
        assert states[-1] == LOADING
        keyed.stop()

    @pytest.mark.asyncio
    async def test_refresh_forwards_to_inner_session(
        self, wait_until: Callable[..., Any]
    ) -> None:
        calls: list[str] = []

        def factory(key: str) -> Callable[[], Any]:
            async def fetch() -> int:
                calls.append(key)
                return len(calls)

            return fetch

        keyed: KeyedPollingSession[str, int] = KeyedPollingSession(factory, None)
        keyed.refresh()

        keyed.set_key("a")
        await wait_until(lambda: keyed.state == Success(1))
        keyed.refresh()
        await wait_until(lambda: keyed.state == Success(2))
        keyed.stop()

        assert calls == ["a", "a"]
