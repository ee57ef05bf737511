"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from kubedash.constants.defaults import KUBECTL_PATH_DEFAULT, MAX_STALE_FAILURES_DEFAULT
from kubedash.constants.limits import (
    LOG_STREAM_TAIL_LINES,
    LOG_TAIL_LINES,
    POLL_INTERVAL_MAX,
    POLL_INTERVAL_MIN,
    STALE_FAILURES_MIN,
    USAGE_HISTORY_SIZE,
    USAGE_HISTORY_SIZE_MAX,
    USAGE_HISTORY_SIZE_MIN,
)
from kubedash.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    FAST_POLL_INTERVAL,
    KUBECTL_COMMAND_TIMEOUT,
    LOG_POLL_INTERVAL,
    SLOW_POLL_INTERVAL,
    USAGE_POLL_INTERVAL,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Cluster access
    kubectl_path: str = KUBECTL_PATH_DEFAULT
    kubeconfig: str = ""
    default_context: str = ""
    request_timeout: str = CLUSTER_REQUEST_TIMEOUT
    command_timeout: int = Field(default=KUBECTL_COMMAND_TIMEOUT, ge=1)

    # Poll intervals (seconds)
    fast_poll_interval: float = Field(
        default=FAST_POLL_INTERVAL, ge=POLL_INTERVAL_MIN, le=POLL_INTERVAL_MAX
    )
    slow_poll_interval: float = Field(
        default=SLOW_POLL_INTERVAL, ge=POLL_INTERVAL_MIN, le=POLL_INTERVAL_MAX
    )
    log_poll_interval: float = Field(
        default=LOG_POLL_INTERVAL, ge=POLL_INTERVAL_MIN, le=POLL_INTERVAL_MAX
    )
    usage_poll_interval: float = Field(
        default=USAGE_POLL_INTERVAL, ge=POLL_INTERVAL_MIN, le=POLL_INTERVAL_MAX
    )

    # None keeps stale data on screen indefinitely after a success
    max_stale_failures: int | None = Field(
        default=MAX_STALE_FAILURES_DEFAULT, ge=STALE_FAILURES_MIN
    )

    # History and logs
    usage_history_size: int = Field(
        default=USAGE_HISTORY_SIZE, ge=USAGE_HISTORY_SIZE_MIN, le=USAGE_HISTORY_SIZE_MAX
    )
    log_tail_lines: int = Field(default=LOG_TAIL_LINES, ge=1)
    log_stream_tail_lines: int = Field(default=LOG_STREAM_TAIL_LINES, ge=0)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
