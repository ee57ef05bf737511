"""Cluster data provider contract and the error taxonomy around it.

The provider is the only thing that talks to a cluster. All of its methods
are blocking; controllers dispatch them to worker threads. Raw objects are
plain dicts in the Kubernetes JSON shape (camelCase keys).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

RawObject = dict[str, Any]


# ============================================================================
# Errors
# ============================================================================


class KubeDashError(Exception):
    """Base exception for dashboard core errors."""


class ProviderError(KubeDashError):
    """A provider call failed (network, auth, server error)."""


class ResourceNotFoundError(ProviderError):
    """The requested object does not exist."""


class ConnectError(ProviderError):
    """The cluster could not be reached or the version check failed."""


class NotConnectedError(KubeDashError):
    """No active provider; connect to a context first."""


class UnsupportedKindError(KubeDashError, ValueError):
    """Caller asked for a kind (or an operation on a kind) that is not supported."""


# ============================================================================
# Protocols
# ============================================================================


@runtime_checkable
class LogStreamHandle(Protocol):
    """Blocking line reader over a followed log stream."""

    def readline(self) -> str | None:
        """Return the next line without its newline, or None at end of stream."""
        ...

    def close(self) -> None:
        """Release the stream; unblocks a pending ``readline``."""
        ...


@runtime_checkable
class ContextSource(Protocol):
    """Read-only view of kubeconfig contexts."""

    def list_contexts(self) -> list[str]: ...

    def current_context(self) -> str: ...


@runtime_checkable
class ClusterDataProvider(Protocol):
    """Per-context handle to a cluster.

    Kind arguments are case-insensitive kind names (``"pod"``, ``"Pod"``).
    Cluster-scoped kinds ignore ``namespace``; ``namespace=None`` on a
    namespaced kind lists across all namespaces.
    """

    def server_version(self) -> str:
        """Return ``major.minor``; this is the connect round trip."""
        ...

    def server_address(self) -> str: ...

    def close(self) -> None: ...

    def list(
        self,
        kind: str,
        namespace: str | None = None,
        *,
        field_selector: str | None = None,
    ) -> list[RawObject]: ...

    def get(self, kind: str, name: str, namespace: str | None = None) -> RawObject:
        """Raises ResourceNotFoundError when the object does not exist."""
        ...

    def delete(self, kind: str, name: str, namespace: str | None = None) -> None: ...

    def get_logs(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 1000,
    ) -> str: ...

    def open_log_stream(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 100,
    ) -> LogStreamHandle: ...

    def list_pod_metrics(self, namespace: str | None = None) -> list[RawObject]:
        """Pod usage from the metrics backend; raises when it is unavailable."""
        ...


__all__ = [
    "ClusterDataProvider",
    "ConnectError",
    "ContextSource",
    "KubeDashError",
    "LogStreamHandle",
    "NotConnectedError",
    "ProviderError",
    "RawObject",
    "ResourceNotFoundError",
    "UnsupportedKindError",
]
