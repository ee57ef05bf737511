"""Cluster domain - provider contract, kind registry, fetchers and parsers."""

from kubedash.controllers.cluster.controller import ClusterController
from kubedash.controllers.cluster.kubectl_provider import (
    KubectlContextSource,
    KubectlProvider,
)
from kubedash.controllers.cluster.provider import (
    ClusterDataProvider,
    ConnectError,
    ContextSource,
    KubeDashError,
    LogStreamHandle,
    NotConnectedError,
    ProviderError,
    ResourceNotFoundError,
    UnsupportedKindError,
)
from kubedash.controllers.cluster.registry import ResourceKind, resolve_kind

__all__ = [
    "ClusterController",
    "ClusterDataProvider",
    "ConnectError",
    "ContextSource",
    "KubeDashError",
    "KubectlContextSource",
    "KubectlProvider",
    "LogStreamHandle",
    "NotConnectedError",
    "ProviderError",
    "ResourceKind",
    "ResourceNotFoundError",
    "UnsupportedKindError",
    "resolve_kind",
]
