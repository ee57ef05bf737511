"""All enum definitions for the dashboard core.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Status Enums
# =============================================================================

class NodeStatus(Enum):
    """Node status values from Kubernetes API."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


class PodPhase(Enum):
    """Pod phase values counted in the cluster histogram."""

    RUNNING = "Running"
    PENDING = "Pending"
    FAILED = "Failed"
    SUCCEEDED = "Succeeded"


class JobStatus(Enum):
    """Derived Job status, in precedence order."""

    RUNNING = "Running"
    COMPLETE = "Complete"
    FAILED = "Failed"
    PENDING = "Pending"


# =============================================================================
# Fetch State Enums
# =============================================================================

class FetchState(Enum):
    """Data fetch state values."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ConnectionStatus(Enum):
    """Cluster connection state shown as a single blocking banner."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class ScreenHealth(Enum):
    """What a screen currently shows; exactly one applies at a time."""

    CONNECTION_ERROR = "connection_error"
    LOADING = "loading"
    SCREEN_ERROR = "screen_error"
    STALE = "stale"
    NORMAL = "normal"


# =============================================================================
# Usage Enums
# =============================================================================

class UsageMetric(Enum):
    """Metrics tracked by the usage history."""

    CPU = "cpu"
    MEMORY = "memory"
    PODS = "pods"


__all__ = [
    "ConnectionStatus",
    "FetchState",
    "JobStatus",
    "NodeStatus",
    "PodPhase",
    "ScreenHealth",
    "UsageMetric",
]
