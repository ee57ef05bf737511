"""Cluster controller - async facade over the active cluster data provider.

Each screen's polling session calls one ``fetch_*`` coroutine. Raw objects
come from the provider in a worker thread; parsers turn them into
immutable view records.

Core list and get failures propagate so the session can publish them.
Enrichment lookups (usage, per-node pod counts, node events, graph extras)
degrade to empty or zero values and are only logged.
"""

from __future__ import annotations

import logging
import time

from kubedash.constants.limits import LOG_DETAIL_TAIL_LINES, LOG_STREAM_TAIL_LINES
from kubedash.controllers.base.base_controller import ActionResult, BaseController
from kubedash.controllers.cluster.fetchers import EventFetcher, PodFetcher, UsageFetcher
from kubedash.controllers.cluster.parsers import (
    ClusterParser,
    EventParser,
    GenericResourceParser,
    GraphParser,
    NodeParser,
    PodParser,
    ServiceParser,
    WorkloadParser,
)
from kubedash.controllers.cluster.parsers.base_parser import Clock
from kubedash.controllers.cluster.provider import (
    ClusterDataProvider,
    KubeDashError,
    LogStreamHandle,
    ProviderError,
    RawObject,
    ResourceNotFoundError,
    UnsupportedKindError,
)
from kubedash.controllers.cluster.registry import require_deletable, resolve_kind
from kubedash.controllers.connection.manager import ConnectionManager
from kubedash.models.cache.data_cache import DataCache
from kubedash.models.core import (
    ClusterSummary,
    DeploymentView,
    EventView,
    GenericResourceView,
    NodeView,
    PodCapacity,
    PodView,
    ResourceGraph,
    ResourceUsageSummary,
    ServiceView,
)
from kubedash.utils.yaml_render import render_resource_yaml

logger = logging.getLogger(__name__)

_NOT_FOUND_YAML = "# Resource not found"


class ClusterController(BaseController):
    """Fetches and parses everything the dashboard screens display.

    ``namespace=None`` means all namespaces on every namespaced fetch.
    """

    CACHE_KEY_NODES = "nodes"
    CACHE_KEY_NAMESPACE_NAMES = "namespace_names"

    def __init__(
        self,
        connection: ConnectionManager,
        *,
        cache: DataCache | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._connection = connection
        self._cache = cache or DataCache()
        self._pod_parser = PodParser(clock)
        self._node_parser = NodeParser(clock)
        self._workload_parser = WorkloadParser(clock)
        self._service_parser = ServiceParser(clock)
        self._event_parser = EventParser(clock)
        self._generic_parser = GenericResourceParser(clock)
        self._cluster_parser = ClusterParser()
        self._graph_parser = GraphParser()

    @property
    def provider(self) -> ClusterDataProvider:
        """Active provider; raises NotConnectedError when disconnected."""
        return self._connection.provider

    @property
    def cache(self) -> DataCache:
        return self._cache

    async def _list(
        self,
        kind: str,
        namespace: str | None = None,
        *,
        field_selector: str | None = None,
    ) -> list[RawObject]:
        provider = self.provider
        return await self._call(
            provider.list, kind, namespace, field_selector=field_selector
        )

    async def _list_best_effort(self, kind: str, namespace: str | None) -> list[RawObject]:
        try:
            return await self._list(kind, namespace)
        except ProviderError as e:
            logger.warning("Optional %s lookup failed: %s", kind, e)
            return []

    async def check_connection(self) -> bool:
        try:
            await self._call(self.provider.server_version)
        except KubeDashError as e:
            logger.debug("Connection check failed: %s", e)
            return False
        return True

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    async def fetch_namespace_names(self) -> list[str]:
        """Namespace names for the namespace selector (briefly cached)."""
        cached = await self._cache.get(self.CACHE_KEY_NAMESPACE_NAMES)
        if cached is not None:
            return cached
        items = await self._list("namespace")
        names = sorted(item.get("metadata", {}).get("name", "") for item in items)
        await self._cache.set(self.CACHE_KEY_NAMESPACE_NAMES, names)
        return names

    async def fetch_namespaces(self) -> list[GenericResourceView]:
        return await self.fetch_generic("Namespace")

    # ------------------------------------------------------------------
    # Core lists
    # ------------------------------------------------------------------

    async def fetch_pods(self, namespace: str | None = None) -> list[PodView]:
        return self._pod_parser.parse_pods(await self._list("pod", namespace))

    async def fetch_pods_by_node(self, node_name: str) -> list[PodView]:
        fetcher = PodFetcher(self.provider)
        pods = await self._call(fetcher.fetch_pods_by_node, node_name)
        return self._pod_parser.parse_pods(pods)

    async def fetch_deployments(self, namespace: str | None = None) -> list[DeploymentView]:
        items = await self._list("deployment", namespace)
        return self._workload_parser.parse_deployments(items)

    async def fetch_services(self, namespace: str | None = None) -> list[ServiceView]:
        return self._service_parser.parse_services(await self._list("service", namespace))

    async def _fetch_raw_nodes(self, *, use_cache: bool) -> list[RawObject]:
        if use_cache:
            cached = await self._cache.get(self.CACHE_KEY_NODES)
            if cached is not None:
                return cached
        items = await self._list("node")
        await self._cache.set(self.CACHE_KEY_NODES, items)
        return items

    async def fetch_nodes(self) -> list[NodeView]:
        """Nodes screen list; always fresh, refreshes the node cache."""
        return self._node_parser.parse_nodes(await self._fetch_raw_nodes(use_cache=False))

    async def fetch_events(self, namespace: str | None = None) -> list[EventView]:
        fetcher = EventFetcher(self.provider)
        events = await self._call(fetcher.fetch_events, namespace)
        return self._event_parser.parse_events(events)

    async def fetch_events_for_node(self, node_name: str) -> list[EventView]:
        fetcher = EventFetcher(self.provider)
        events = await self._call(fetcher.fetch_events_for_node, node_name)
        return self._event_parser.parse_events(
            self._event_parser.filter_for_node(events, node_name)
        )

    async def fetch_generic(
        self, kind: str, namespace: str | None = None
    ) -> list[GenericResourceView]:
        """List any kind the generic resource screen supports.

        Raises:
            UnsupportedKindError: If the kind has no generic columns.
        """
        resource_kind = resolve_kind(kind)
        if resource_kind.columns is None:
            raise UnsupportedKindError(
                f"{resource_kind.name} is not shown on the generic resource screen"
            )
        items = await self._list(resource_kind.name, namespace)
        return self._generic_parser.parse_all(
            items, resource_kind.columns, namespaced=resource_kind.namespaced
        )

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def fetch_cluster_summary(self, namespace: str | None = None) -> ClusterSummary:
        """Counts for the overview; pods/deployments/services follow ``namespace``."""
        provider = self.provider
        version = await self._call(provider.server_version)
        nodes = await self._fetch_raw_nodes(use_cache=False)
        namespaces = await self._list("namespace")
        pods = await self._list("pod", namespace)
        deployments = await self._list("deployment", namespace)
        services = await self._list("service", namespace)
        return self._cluster_parser.parse_summary(
            name=self._connection.active_context,
            server=self._connection.active_server_address(),
            version=version,
            nodes=nodes,
            namespaces=namespaces,
            pods=pods,
            deployments=deployments,
            services=services,
        )

    async def fetch_resource_usage(self, namespace: str | None = None) -> ResourceUsageSummary:
        """Used vs allocatable CPU/memory; never raises."""
        try:
            fetcher = UsageFetcher(self.provider)
        except KubeDashError as e:
            logger.debug("Usage summary skipped: %s", e)
            return ResourceUsageSummary.unavailable()
        return await self._call(fetcher.fetch_usage, namespace)

    async def fetch_pod_capacity(self, nodes: list[NodeView] | None = None) -> PodCapacity:
        """Cluster-wide pods vs allocatable pod slots; never raises."""
        try:
            if nodes is None:
                raw_nodes = await self._fetch_raw_nodes(use_cache=True)
                nodes = self._node_parser.parse_nodes(raw_nodes)
            fetcher = PodFetcher(self.provider)
        except Exception as e:
            logger.warning("Pod capacity unavailable: %s", e)
            return PodCapacity()
        return await self._call(fetcher.fetch_pod_capacity, nodes)

    async def fetch_deployment_graph(self, name: str, namespace: str) -> ResourceGraph:
        """Relationship graph around one deployment."""
        provider = self.provider
        deployment = await self._call(provider.get, "deployment", name, namespace)
        replica_sets = await self._list("replicaset", namespace)
        pods = await self._list("pod", namespace)
        services = await self._list("service", namespace)
        ingresses = await self._list_best_effort("ingress", namespace)
        hpas = await self._list_best_effort("hpa", namespace)
        return self._graph_parser.build_deployment_graph(
            deployment,
            replica_sets=replica_sets,
            pods=pods,
            services=services,
            ingresses=ingresses,
            hpas=hpas,
        )

    # ------------------------------------------------------------------
    # Detail, logs, actions
    # ------------------------------------------------------------------

    async def fetch_resource_yaml(
        self, kind: str, name: str, namespace: str | None = None
    ) -> str:
        resource_kind = resolve_kind(kind)
        provider = self.provider
        try:
            resource = await self._call(provider.get, resource_kind.name, name, namespace)
        except ResourceNotFoundError:
            return _NOT_FOUND_YAML
        return render_resource_yaml(resource)

    async def fetch_pod_logs(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = LOG_DETAIL_TAIL_LINES,
    ) -> list[str]:
        provider = self.provider
        text = await self._call(
            provider.get_logs, pod_name, namespace, container, tail_lines
        )
        return text.splitlines()

    async def open_log_stream(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = LOG_STREAM_TAIL_LINES,
    ) -> LogStreamHandle:
        provider = self.provider
        return await self._call(
            provider.open_log_stream, pod_name, namespace, container, tail_lines
        )

    async def delete_resource(
        self, kind: str, name: str, namespace: str | None = None
    ) -> ActionResult:
        """Delete one object; the outcome is returned, never raised."""
        started = time.monotonic()
        try:
            resource_kind = require_deletable(kind)
            provider = self.provider
            await self._call(provider.delete, resource_kind.name, name, namespace)
        except KubeDashError as e:
            logger.warning("Delete %s %s failed: %s", kind, name, e)
            return ActionResult.failed(str(e), started=started)
        return ActionResult.ok(started=started)

