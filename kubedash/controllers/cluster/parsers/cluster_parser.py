"""Cluster overview parser - counts and pod-phase histogram."""

from __future__ import annotations

from collections import Counter
from typing import Any

from kubedash.constants.enums import PodPhase
from kubedash.models.core.cluster_info import ClusterSummary


class ClusterParser:
    """Builds the ClusterSummary shown on the overview screen."""

    def parse_summary(
        self,
        *,
        name: str,
        server: str,
        version: str,
        nodes: list[dict[str, Any]],
        namespaces: list[dict[str, Any]],
        pods: list[dict[str, Any]],
        deployments: list[dict[str, Any]],
        services: list[dict[str, Any]],
    ) -> ClusterSummary:
        phases = Counter(pod.get("status", {}).get("phase") for pod in pods)
        return ClusterSummary(
            name=name,
            server=server,
            version=version,
            nodes_count=len(nodes),
            namespaces_count=len(namespaces),
            pods_count=len(pods),
            deployments_count=len(deployments),
            services_count=len(services),
            running_pods=phases[PodPhase.RUNNING.value],
            pending_pods=phases[PodPhase.PENDING.value],
            failed_pods=phases[PodPhase.FAILED.value],
            succeeded_pods=phases[PodPhase.SUCCEEDED.value],
        )
