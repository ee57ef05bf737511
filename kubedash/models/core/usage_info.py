"""Resource usage models fed by the metrics backend."""

from kubedash.models.core._base import ViewRecord
from kubedash.utils.resource_parser import fraction as usage_fraction


class ResourceUsageSummary(ViewRecord):
    """Used vs allocatable CPU and memory.

    When ``metrics_available`` is False every quantity is zero and means
    nothing; the fraction helpers return None in that case.
    """

    cpu_used_millis: int = 0
    cpu_capacity_millis: int = 0
    memory_used_bytes: int = 0
    memory_capacity_bytes: int = 0
    metrics_available: bool = False

    @classmethod
    def unavailable(cls) -> "ResourceUsageSummary":
        return cls(metrics_available=False)

    @property
    def cpu_fraction(self) -> float | None:
        if not self.metrics_available:
            return None
        return usage_fraction(self.cpu_used_millis, self.cpu_capacity_millis)

    @property
    def memory_fraction(self) -> float | None:
        if not self.metrics_available:
            return None
        return usage_fraction(self.memory_used_bytes, self.memory_capacity_bytes)


class PodCapacity(ViewRecord):
    """Cluster-wide scheduled pods vs allocatable pod slots."""

    pods_count: int = 0
    pods_capacity: int = 0

    @property
    def fraction(self) -> float:
        return usage_fraction(self.pods_count, self.pods_capacity)
