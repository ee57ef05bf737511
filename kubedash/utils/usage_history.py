"""Bounded rolling windows of utilization fractions for sparklines."""

from __future__ import annotations

from collections import deque

from kubedash.constants.enums import UsageMetric
from kubedash.constants.limits import USAGE_HISTORY_SIZE
from kubedash.models.core.usage_info import PodCapacity, ResourceUsageSummary


class UsageHistoryTracker:
    """FIFO history per metric with a fixed capacity.

    Appending beyond capacity evicts the oldest sample. A metric with no
    samples yields an empty tuple.
    """

    def __init__(self, capacity: int = USAGE_HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._samples: dict[UsageMetric, deque[float]] = {
            metric: deque(maxlen=capacity) for metric in UsageMetric
        }

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, metric: UsageMetric, value: float) -> None:
        self._samples[metric].append(float(value))

    def history(self, metric: UsageMetric) -> tuple[float, ...]:
        """Return samples for ``metric``, oldest first."""
        return tuple(self._samples[metric])

    def latest(self, metric: UsageMetric) -> float | None:
        samples = self._samples[metric]
        return samples[-1] if samples else None

    def record_usage(self, summary: ResourceUsageSummary | None) -> bool:
        """Append cpu and memory fractions from a usage poll.

        Nothing is recorded when metrics are unavailable, since the
        quantities are meaningless then.

        Returns:
            True if samples were appended.
        """
        if summary is None or not summary.metrics_available:
            return False
        self.append(UsageMetric.CPU, summary.cpu_fraction or 0.0)
        self.append(UsageMetric.MEMORY, summary.memory_fraction or 0.0)
        return True

    def record_pods(self, capacity: PodCapacity) -> None:
        """Append the cluster-wide pods/capacity fraction."""
        self.append(UsageMetric.PODS, capacity.fraction)

    def clear(self) -> None:
        for samples in self._samples.values():
            samples.clear()
