"""Limit and threshold constants for the dashboard core.

All limit values, thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# History and buffer limits
# ============================================================================

USAGE_HISTORY_SIZE: Final = 20
LOG_TAIL_LINES: Final = 2000
LOG_DETAIL_TAIL_LINES: Final = 1000
LOG_STREAM_TAIL_LINES: Final = 100
LOG_STREAM_BUFFER_LINES: Final = 5000

# ============================================================================
# Validation limits
# ============================================================================

POLL_INTERVAL_MIN: Final = 1.0
POLL_INTERVAL_MAX: Final = 300.0
USAGE_HISTORY_SIZE_MIN: Final = 2
USAGE_HISTORY_SIZE_MAX: Final = 500
STALE_FAILURES_MIN: Final = 1

# ============================================================================
# Cache limits
# ============================================================================

CACHE_MAX_ENTRIES: Final = 256

__all__ = [
    "CACHE_MAX_ENTRIES",
    "LOG_DETAIL_TAIL_LINES",
    "LOG_STREAM_BUFFER_LINES",
    "LOG_STREAM_TAIL_LINES",
    "LOG_TAIL_LINES",
    "POLL_INTERVAL_MAX",
    "POLL_INTERVAL_MIN",
    "STALE_FAILURES_MIN",
    "USAGE_HISTORY_SIZE",
    "USAGE_HISTORY_SIZE_MAX",
    "USAGE_HISTORY_SIZE_MIN",
]
