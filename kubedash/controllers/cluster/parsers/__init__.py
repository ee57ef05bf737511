"""Parsers for cluster data - raw objects to immutable view records."""

from kubedash.controllers.cluster.parsers.cluster_parser import ClusterParser
from kubedash.controllers.cluster.parsers.event_parser import EventParser
from kubedash.controllers.cluster.parsers.generic_parser import GenericResourceParser
from kubedash.controllers.cluster.parsers.graph_parser import GraphParser
from kubedash.controllers.cluster.parsers.node_parser import NodeParser
from kubedash.controllers.cluster.parsers.pod_parser import (
    PodParser,
    effective_pod_status,
)
from kubedash.controllers.cluster.parsers.service_parser import ServiceParser
from kubedash.controllers.cluster.parsers.workload_parser import WorkloadParser

__all__ = [
    "ClusterParser",
    "EventParser",
    "GenericResourceParser",
    "GraphParser",
    "NodeParser",
    "PodParser",
    "ServiceParser",
    "WorkloadParser",
    "effective_pod_status",
]
