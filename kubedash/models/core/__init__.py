"""Immutable view records produced by the aggregators."""

from kubedash.models.core.cluster_info import ClusterSummary
from kubedash.models.core.event_info import EventView
from kubedash.models.core.graph_info import (
    ResourceGraph,
    ResourceGraphEdge,
    ResourceGraphNode,
)
from kubedash.models.core.node_info import NodeView
from kubedash.models.core.pod_info import ContainerView, PodView
from kubedash.models.core.resource_info import GenericResourceView
from kubedash.models.core.service_info import ServiceView
from kubedash.models.core.usage_info import PodCapacity, ResourceUsageSummary
from kubedash.models.core.workload_info import DeploymentView

__all__ = [
    "ClusterSummary",
    "ContainerView",
    "DeploymentView",
    "EventView",
    "GenericResourceView",
    "NodeView",
    "PodCapacity",
    "PodView",
    "ResourceGraph",
    "ResourceGraphEdge",
    "ResourceGraphNode",
    "ResourceUsageSummary",
    "ServiceView",
]
