"""Constants module for the dashboard core.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- timeouts.py: Timeout and poll interval values (seconds)
- limits.py: Limit values (max/min, buffer sizes)
- defaults.py: Default values for settings
"""

from kubedash.constants.defaults import (
    ALL_NAMESPACES,
    KUBECTL_PATH_DEFAULT,
    NONE_PLACEHOLDER,
)
from kubedash.constants.enums import (
    ConnectionStatus,
    FetchState,
    JobStatus,
    NodeStatus,
    PodPhase,
    ScreenHealth,
    UsageMetric,
)
from kubedash.constants.limits import (
    LOG_TAIL_LINES,
    USAGE_HISTORY_SIZE,
)
from kubedash.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    FAST_POLL_INTERVAL,
    LOG_POLL_INTERVAL,
    SLOW_POLL_INTERVAL,
    USAGE_POLL_INTERVAL,
)

__all__ = [
    # Defaults
    "ALL_NAMESPACES",
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "FAST_POLL_INTERVAL",
    "KUBECTL_PATH_DEFAULT",
    "LOG_POLL_INTERVAL",
    # Limits
    "LOG_TAIL_LINES",
    "NONE_PLACEHOLDER",
    "SLOW_POLL_INTERVAL",
    "USAGE_HISTORY_SIZE",
    "USAGE_POLL_INTERVAL",
    # Enums
    "ConnectionStatus",
    "FetchState",
    "JobStatus",
    "NodeStatus",
    "PodPhase",
    "ScreenHealth",
    "UsageMetric",
]
