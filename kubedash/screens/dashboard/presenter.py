"""Dashboard presenter - intents in, PollState updates out.

The presentation layer never talks to the provider. It sends intents
(navigate, select, namespace, search, context switch, delete) and observes
the screen session, the usage sessions and the connection status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from kubedash.constants.enums import ConnectionStatus, ScreenHealth
from kubedash.controllers.base.base_controller import ActionResult
from kubedash.controllers.cluster.controller import ClusterController
from kubedash.controllers.cluster.provider import KubeDashError, UnsupportedKindError
from kubedash.controllers.connection.manager import ConnectionManager
from kubedash.models.cache.data_cache import DataCache
from kubedash.models.core.usage_info import PodCapacity, ResourceUsageSummary
from kubedash.models.state.app_settings import AppSettings
from kubedash.models.state.app_state import AppState
from kubedash.models.state.poll_state import Error, Loading, PollState, Success
from kubedash.models.state.screens import (
    PodLogs,
    PollCadence,
    ResourceDetail,
    Screen,
    ScreenKind,
)
from kubedash.polling.keyed_session import KeyedPollingSession
from kubedash.polling.log_stream import LogStreamSession
from kubedash.polling.session import Fetch, PollingSession, Subscriber, Unsubscribe
from kubedash.utils.search import filter_by_query
from kubedash.utils.selection import SelectionTracker
from kubedash.utils.usage_history import UsageHistoryTracker

logger = logging.getLogger(__name__)

ScreenKey = tuple[Screen, str | None]


class DashboardPresenter:
    """Owns every polling session the dashboard runs.

    - one keyed session for the current screen, keyed by
      ``(screen, namespace filter)``
    - one keyed usage session, keyed by namespace filter
    - one pod capacity sampler feeding the usage history
    - an optional followed log stream
    """

    def __init__(
        self,
        connection: ConnectionManager,
        controller: ClusterController,
        *,
        settings: AppSettings | None = None,
        state: AppState | None = None,
    ) -> None:
        self._connection = connection
        self._controller = controller
        self.settings = settings or AppSettings()
        self.state = state or AppState()
        self.selection: SelectionTracker[Any] = SelectionTracker()
        self.usage_history = UsageHistoryTracker(self.settings.usage_history_size)
        self.namespace_names: list[str] = []
        self.last_usage: ResourceUsageSummary | None = None

        self._screen_session: KeyedPollingSession[ScreenKey, Any] = KeyedPollingSession(
            self._screen_fetcher,
            self._screen_interval,
            name="screen",
            max_stale_failures=self.settings.max_stale_failures,
        )
        self._screen_session.subscribe(self._on_screen_state)

        self._usage_session: KeyedPollingSession[str | None, ResourceUsageSummary] = (
            KeyedPollingSession(
                self._usage_fetcher,
                self.settings.usage_poll_interval,
                name="usage",
            )
        )
        self._usage_session.subscribe(self._on_usage_state)

        self._pods_session: PollingSession[PodCapacity] = PollingSession(
            self._controller.fetch_pod_capacity,
            self.settings.usage_poll_interval,
            name="pod-capacity",
        )
        self._pods_session.subscribe(self._on_pod_capacity_state)

        self._log_stream: LogStreamSession | None = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> DashboardPresenter:
        """Wire a kubectl-backed connection and controller around ``settings``."""
        cache = DataCache()
        connection = ConnectionManager.from_settings(settings, cache=cache)
        controller = ClusterController(connection, cache=cache)
        return cls(connection, controller, settings=settings)

    # =========================================================================
    # Screen fetchers
    # =========================================================================

    def interval_for(self, cadence: PollCadence) -> float | None:
        intervals = {
            PollCadence.FAST: self.settings.fast_poll_interval,
            PollCadence.SLOW: self.settings.slow_poll_interval,
            PollCadence.LOGS: self.settings.log_poll_interval,
            PollCadence.ONCE: None,
        }
        return intervals[cadence]

    def _screen_interval(self, key: ScreenKey) -> float | None:
        screen, _namespace = key
        return self.interval_for(screen.cadence)

    def fetcher_for(self, screen: Screen, namespace: str | None) -> Fetch[Any]:
        """Coroutine function that loads the data ``screen`` displays."""
        controller = self._controller
        if isinstance(screen, ResourceDetail):
            return lambda: controller.fetch_resource_yaml(
                screen.kind, screen.name, screen.namespace
            )
        if isinstance(screen, PodLogs):
            return lambda: controller.fetch_pod_logs(
                screen.pod_name,
                screen.namespace,
                screen.container,
                self.settings.log_tail_lines,
            )

        kind = screen.kind
        by_kind: dict[ScreenKind, Fetch[Any]] = {
            ScreenKind.CLUSTER_OVERVIEW: lambda: controller.fetch_cluster_summary(namespace),
            ScreenKind.NODES: controller.fetch_nodes,
            ScreenKind.NAMESPACES: controller.fetch_namespaces,
            ScreenKind.EVENTS: lambda: controller.fetch_events(namespace),
            ScreenKind.PODS: lambda: controller.fetch_pods(namespace),
            ScreenKind.DEPLOYMENTS: lambda: controller.fetch_deployments(namespace),
            ScreenKind.SERVICES: lambda: controller.fetch_services(namespace),
        }
        if kind in by_kind:
            return by_kind[kind]
        resource_kind = kind.resource_kind
        if resource_kind is None:
            raise UnsupportedKindError(f"No fetcher for screen {kind.name}")
        return lambda: controller.fetch_generic(resource_kind, namespace)

    def _screen_fetcher(self, key: ScreenKey) -> Fetch[Any]:
        screen, namespace = key
        return self.fetcher_for(screen, namespace)

    def _usage_fetcher(self, namespace: str | None) -> Fetch[ResourceUsageSummary]:
        return lambda: self._controller.fetch_resource_usage(namespace)

    # =========================================================================
    # Session callbacks
    # =========================================================================

    def _on_screen_state(self, state: PollState[Any]) -> None:
        if isinstance(state, Success) and isinstance(state.data, list):
            self.selection.reconcile(state.data)
        elif isinstance(state, (Loading, Error)):
            self.selection.clear()

    def _on_usage_state(self, state: PollState[ResourceUsageSummary]) -> None:
        if isinstance(state, Success):
            self.last_usage = state.data
            self.usage_history.record_usage(state.data)

    def _on_pod_capacity_state(self, state: PollState[PodCapacity]) -> None:
        if isinstance(state, Success):
            self.usage_history.record_pods(state.data)

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def screen_session(self) -> KeyedPollingSession[ScreenKey, Any]:
        return self._screen_session

    @property
    def usage_session(self) -> KeyedPollingSession[str | None, ResourceUsageSummary]:
        return self._usage_session

    @property
    def screen_state(self) -> PollState[Any]:
        return self._screen_session.state

    @property
    def usage_state(self) -> PollState[ResourceUsageSummary]:
        return self._usage_session.state

    @property
    def log_stream(self) -> LogStreamSession | None:
        return self._log_stream

    @property
    def connection_status(self) -> ConnectionStatus:
        return self._connection.status

    def subscribe_screen(self, callback: Subscriber[Any]) -> Unsubscribe:
        return self._screen_session.subscribe(callback)

    def subscribe_usage(self, callback: Subscriber[ResourceUsageSummary]) -> Unsubscribe:
        return self._usage_session.subscribe(callback)

    def screen_health(self) -> ScreenHealth:
        """The one banner the current screen should show."""
        if self._connection.status is ConnectionStatus.CONNECTING:
            return ScreenHealth.LOADING
        if self._connection.status is not ConnectionStatus.CONNECTED:
            return ScreenHealth.CONNECTION_ERROR
        state = self.screen_state
        if isinstance(state, Loading):
            return ScreenHealth.LOADING
        if isinstance(state, Error):
            return ScreenHealth.SCREEN_ERROR
        if self._screen_session.is_stale:
            return ScreenHealth.STALE
        return ScreenHealth.NORMAL

    def status_message(self) -> str:
        health = self.screen_health()
        if health is ScreenHealth.CONNECTION_ERROR:
            return self._connection.status_message or "Not connected to a cluster"
        if health is ScreenHealth.SCREEN_ERROR:
            state = self.screen_state
            return state.message if isinstance(state, Error) else ""
        return ""

    def visible_items(self) -> Sequence[Any]:
        """Current list data filtered by the search query."""
        state = self.screen_state
        if not isinstance(state, Success) or not isinstance(state.data, list):
            return []
        return filter_by_query(state.data, self.state.search_query)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _screen_key(self) -> ScreenKey:
        return (self.state.current_screen, self.state.namespace_filter)

    def _start_sessions(self) -> None:
        self._screen_session.set_key(self._screen_key())
        self._usage_session.set_key(self.state.namespace_filter)
        self._pods_session.start()

    def stop(self) -> None:
        """Stop every session this presenter owns."""
        self._screen_session.stop()
        self._usage_session.stop()
        self._pods_session.stop()
        self.stop_log_stream()

    async def start(self) -> ActionResult:
        """Connect to the configured default context and start polling."""
        return await self.switch_context(self.settings.default_context or None)

    async def refresh_namespaces(self) -> list[str]:
        """Reload namespace names for the selector; failures keep it empty."""
        try:
            self.namespace_names = await self._controller.fetch_namespace_names()
        except KubeDashError as e:
            logger.warning("Could not load namespaces: %s", e)
            self.namespace_names = []
        return self.namespace_names

    # =========================================================================
    # Intents
    # =========================================================================

    def navigate(self, screen: Screen) -> None:
        self.stop_log_stream()
        self.state.navigate(screen)
        self.selection.clear()
        self._screen_session.set_key(self._screen_key())

    def go_back(self) -> bool:
        if not self.state.go_back():
            return False
        self.stop_log_stream()
        self.selection.clear()
        self._screen_session.set_key(self._screen_key())
        return True

    def select(self, uid: str | None) -> Any | None:
        """Toggle selection of the item with ``uid`` in the current data."""
        if uid is None:
            self.selection.clear()
            return None
        state = self.screen_state
        items = state.data if isinstance(state, Success) and isinstance(state.data, list) else []
        item = next((candidate for candidate in items if candidate.uid == uid), None)
        if item is None:
            logger.debug("Select ignored, uid %s not in current data", uid)
            return self.selection.selected
        return self.selection.select(item)

    def set_namespace(self, namespace: str | None) -> None:
        self.state.set_namespace(namespace)
        self.selection.clear()
        self._screen_session.set_key(self._screen_key())
        self._usage_session.set_key(self.state.namespace_filter)

    def set_search_query(self, query: str) -> None:
        self.state.set_search_query(query)

    def refresh(self) -> None:
        self._screen_session.refresh()

    async def switch_context(self, context: str | None) -> ActionResult:
        """Reconnect to ``context`` and restart polling from Loading."""
        self.stop()
        self.selection.clear()
        self.usage_history.clear()
        self.last_usage = None
        result = await self._connection.connect(context)
        self.state.set_context(self._connection.active_context)
        if not result.success:
            self.namespace_names = []
            return result
        await self.refresh_namespaces()
        self._start_sessions()
        return result

    async def delete_resource(
        self, kind: str, name: str, namespace: str | None = None
    ) -> ActionResult:
        """Delete one object; polling sessions are left untouched."""
        return await self._controller.delete_resource(kind, name, namespace)

    # =========================================================================
    # Log streaming
    # =========================================================================

    def follow_logs(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        on_state: Callable[[PollState[tuple[str, ...]]], None] | None = None,
    ) -> LogStreamSession:
        """Start tailing a pod's logs; replaces any stream already running."""
        self.stop_log_stream()
        tail_lines = self.settings.log_stream_tail_lines
        stream = LogStreamSession(
            lambda: self._controller.open_log_stream(pod_name, namespace, container, tail_lines),
            interval=self.settings.log_poll_interval,
            name=f"{namespace}/{pod_name}",
        )
        if on_state is not None:
            stream.subscribe(on_state)
        self._log_stream = stream
        stream.start()
        return stream

    def stop_log_stream(self) -> None:
        stream, self._log_stream = self._log_stream, None
        if stream is not None:
            stream.stop()


__all__ = ["DashboardPresenter", "ScreenKey"]
