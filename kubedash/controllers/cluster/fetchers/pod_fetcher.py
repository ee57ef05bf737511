"""Pod fetcher for cluster controller - pod lists scoped to a node."""

from __future__ import annotations

import logging

from kubedash.controllers.cluster.provider import ClusterDataProvider, RawObject
from kubedash.models.core.node_info import NodeView
from kubedash.models.core.usage_info import PodCapacity

logger = logging.getLogger(__name__)

_NODE_FIELD_SELECTORS = ("spec.nodeName", "status.nominatedNodeName")


class PodFetcher:
    """Fetches pod data from Kubernetes cluster."""

    def __init__(self, provider: ClusterDataProvider) -> None:
        self._provider = provider

    def fetch_pods_by_node(self, node_name: str) -> list[RawObject]:
        """Pods scheduled on, or nominated for, ``node_name``.

        Failures propagate. A pod matched by both selectors is returned once.
        """
        pods: list[RawObject] = []
        seen: set[tuple[str, str]] = set()
        for field in _NODE_FIELD_SELECTORS:
            for pod in self._provider.list("pod", None, field_selector=f"{field}={node_name}"):
                metadata = pod.get("metadata", {})
                key = (metadata.get("namespace", ""), metadata.get("name", ""))
                if key in seen:
                    continue
                seen.add(key)
                pods.append(pod)
        return pods

    def count_pods_on_node(self, node_name: str) -> int:
        """Number of pods on a node as listed by ``fetch_pods_by_node``; 0 on failure."""
        try:
            return len(self.fetch_pods_by_node(node_name))
        except Exception as e:
            logger.debug("Pod count for node %s unavailable: %s", node_name, e)
            return 0

    def fetch_pod_capacity(self, nodes: list[NodeView]) -> PodCapacity:
        """Cluster-wide pod count against allocatable pod slots.

        Each node is counted independently; one failing node does not
        fail the aggregate.
        """
        pods_count = sum(self.count_pods_on_node(node.name) for node in nodes)
        pods_capacity = sum(node.pods_capacity for node in nodes)
        return PodCapacity(pods_count=pods_count, pods_capacity=pods_capacity)
