"""Usage fetcher for cluster controller - metrics backend aggregation."""

from __future__ import annotations

import logging

from kubedash.controllers.cluster.parsers.node_parser import NodeParser
from kubedash.controllers.cluster.provider import ClusterDataProvider
from kubedash.models.core.usage_info import ResourceUsageSummary
from kubedash.utils.resource_parser import parse_cpu_to_millis, parse_memory_to_bytes

logger = logging.getLogger(__name__)


class UsageFetcher:
    """Aggregates container usage against node allocatable capacity."""

    def __init__(self, provider: ClusterDataProvider) -> None:
        self._provider = provider

    def fetch_usage(self, namespace: str | None = None) -> ResourceUsageSummary:
        """Summarize used vs allocatable CPU and memory.

        Usage is namespace-scoped when ``namespace`` is given; capacity is
        always cluster-wide. Never raises: an unreachable metrics backend
        yields ``ResourceUsageSummary.unavailable()``.
        """
        try:
            pod_metrics = self._provider.list_pod_metrics(namespace)
        except Exception as e:
            logger.info("Metrics backend unavailable: %s", e)
            return ResourceUsageSummary.unavailable()

        cpu_used = 0
        memory_used = 0
        for pod_metric in pod_metrics:
            for container in pod_metric.get("containers") or []:
                usage = container.get("usage") or {}
                cpu_used += parse_cpu_to_millis(str(usage.get("cpu", "0")))
                memory_used += parse_memory_to_bytes(str(usage.get("memory", "0")))

        try:
            nodes = self._provider.list("node")
        except Exception as e:
            logger.warning("Node capacity unavailable for usage summary: %s", e)
            nodes = []
        cpu_capacity, memory_capacity = NodeParser.allocatable_totals(nodes)

        return ResourceUsageSummary(
            cpu_used_millis=cpu_used,
            cpu_capacity_millis=cpu_capacity,
            memory_used_bytes=memory_used,
            memory_capacity_bytes=memory_capacity,
            metrics_available=True,
        )
