"""PollingMixin - binds polling sessions to a Textual screen's lifecycle.

Sessions publish PollState changes through plain callbacks. This mixin
turns each change into a Textual message posted to the screen, and stops
the sessions it started when the screen is unmounted, so navigating away
never leaves a session polling invisibly.

Usage:
    ```python
    class PodsScreen(PollingMixin, Screen):
        def on_mount(self) -> None:
            self.bind_session(presenter.screen_session, key="pods", owned=False)

        def on_poll_state_changed(self, event: PollStateChanged) -> None:
            ...
    ```
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any, Protocol

from textual._context import NoActiveAppError
from textual.message import Message
from textual.reactive import reactive

from kubedash.constants.enums import FetchState
from kubedash.models.state.poll_state import Error, PollState
from kubedash.polling.session import Subscriber, Unsubscribe

logger = logging.getLogger(__name__)


class ObservableSession(Protocol):
    """Anything with the session subscribe/stop surface."""

    def subscribe(self, callback: Subscriber[Any]) -> Unsubscribe: ...

    def stop(self) -> None: ...


# ============================================================================
# Messages
# ============================================================================


class PollStateChanged(Message):
    """A bound session published a new state.

    Attributes:
        key: The key the session was bound under.
        state: The published PollState.
    """

    def __init__(self, key: str, state: PollState[Any]) -> None:
        super().__init__()
        self.key = key
        self.state = state


# ============================================================================
# PollingMixin
# ============================================================================


class PollingMixin:
    """Mixin forwarding session states to the screen as messages.

    Reactive ``poll_status`` mirrors the most recent state's FetchState and
    ``poll_error`` its error message, for screens that only need a banner.
    """

    poll_status = reactive(FetchState.LOADING)
    poll_error = reactive[str | None](None)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._bindings: dict[str, tuple[ObservableSession, Unsubscribe, bool]] = {}

    def bind_session(
        self,
        session: ObservableSession,
        *,
        key: str,
        owned: bool = True,
    ) -> None:
        """Subscribe to ``session``; replaces any session bound under ``key``.

        Args:
            session: Polling, keyed or log stream session.
            key: Name echoed back in PollStateChanged messages.
            owned: Stop the session when it is unbound or the screen unmounts.
        """
        self.unbind_session(key)

        def forward(state: PollState[Any]) -> None:
            self._on_session_state(key, state)

        unsubscribe = session.subscribe(forward)
        self._bindings[key] = (session, unsubscribe, owned)

    def unbind_session(self, key: str) -> None:
        binding = self._bindings.pop(key, None)
        if binding is None:
            return
        session, unsubscribe, owned = binding
        unsubscribe()
        if owned:
            session.stop()
            logger.debug("Stopped session bound as %s", key)

    def unbind_all_sessions(self) -> None:
        for key in list(self._bindings):
            self.unbind_session(key)

    def on_unmount(self) -> None:
        """Stop owned sessions when the screen is unmounted."""
        self.unbind_all_sessions()

    def _on_session_state(self, key: str, state: PollState[Any]) -> None:
        self.poll_status = state.status  # type: ignore[assignment]
        self.poll_error = state.message if isinstance(state, Error) else None  # type: ignore[assignment]
        with suppress(NoActiveAppError):
            self.post_message(PollStateChanged(key, state))  # type: ignore[attr-defined]


__all__ = [
    "ObservableSession",
    "PollStateChanged",
    "PollingMixin",
]
