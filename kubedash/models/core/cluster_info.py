"""Cluster overview summary model."""

from kubedash.models.core._base import ViewRecord


class ClusterSummary(ViewRecord):
    """Counts and pod-phase histogram for the overview screen.

    Pods in a phase outside the histogram are counted in ``pods_count`` only.
    """

    name: str = ""
    server: str = ""
    version: str = ""
    nodes_count: int = 0
    namespaces_count: int = 0
    pods_count: int = 0
    deployments_count: int = 0
    services_count: int = 0
    running_pods: int = 0
    pending_pods: int = 0
    failed_pods: int = 0
    succeeded_pods: int = 0

    @property
    def histogram(self) -> dict[str, int]:
        return {
            "running": self.running_pods,
            "pending": self.pending_pods,
            "failed": self.failed_pods,
            "succeeded": self.succeeded_pods,
        }
