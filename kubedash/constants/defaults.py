"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Cluster defaults
# ============================================================================

KUBECTL_PATH_DEFAULT: Final = "kubectl"
ALL_NAMESPACES: Final = "All Namespaces"
NONE_PLACEHOLDER: Final = "<none>"

# ============================================================================
# Polling defaults
# ============================================================================

MAX_STALE_FAILURES_DEFAULT: Final = None

# ============================================================================
# Settings file
# ============================================================================

SETTINGS_DIR_NAME: Final = "kubedash"
SETTINGS_FILE_NAME: Final = "settings.yaml"

__all__ = [
    "ALL_NAMESPACES",
    "KUBECTL_PATH_DEFAULT",
    "MAX_STALE_FAILURES_DEFAULT",
    "NONE_PLACEHOLDER",
    "SETTINGS_DIR_NAME",
    "SETTINGS_FILE_NAME",
]
