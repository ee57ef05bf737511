"""Timeout constants for the dashboard core.

All timeout and interval values for API requests, async operations, and refresh cycles.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeouts (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45
KUBECTL_CONFIG_TIMEOUT: Final = 8

# ============================================================================
# Poll intervals (float, in seconds)
# ============================================================================

FAST_POLL_INTERVAL: Final = 5.0
SLOW_POLL_INTERVAL: Final = 10.0
LOG_POLL_INTERVAL: Final = 3.0
USAGE_POLL_INTERVAL: Final = 10.0

# ============================================================================
# Async operation timeouts (float, in seconds)
# ============================================================================

LOG_STREAM_STOP_TIMEOUT: Final = 5.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "FAST_POLL_INTERVAL",
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_CONFIG_TIMEOUT",
    "LOG_POLL_INTERVAL",
    "LOG_STREAM_STOP_TIMEOUT",
    "SLOW_POLL_INTERVAL",
    "USAGE_POLL_INTERVAL",
]
