"""Resource relationship graph models."""

from __future__ import annotations

from itertools import groupby
from typing import Final

from pydantic import Field

from kubedash.models.core._base import ViewRecord

# Display layer per kind; lower ranks are drawn first.
KIND_LAYER_ORDER: Final[dict[str, int]] = {
    "Ingress": 0,
    "Service": 1,
    "HPA": 2,
    "Deployment": 3,
    "ReplicaSet": 4,
    "Pod": 5,
    "ConfigMap": 6,
    "Secret": 6,
    "PVC": 6,
    "ServiceAccount": 6,
}
UNKNOWN_KIND_RANK: Final = 99


def kind_rank(kind: str) -> int:
    return KIND_LAYER_ORDER.get(kind, UNKNOWN_KIND_RANK)


class ResourceGraphNode(ViewRecord):
    """One resource in the graph; ``id`` is ``Kind/name``."""

    id: str
    kind: str
    name: str
    status: str | None = None


class ResourceGraphEdge(ViewRecord):
    """Parent to child relationship (ownership or reference)."""

    source_id: str
    target_id: str


class ResourceGraph(ViewRecord):
    """Resources related to one workload and how they connect."""

    nodes: list[ResourceGraphNode] = Field(default_factory=list)
    edges: list[ResourceGraphEdge] = Field(default_factory=list)

    @staticmethod
    def node_id(kind: str, name: str) -> str:
        return f"{kind}/{name}"

    def get_node(self, node_id: str) -> ResourceGraphNode | None:
        return next((node for node in self.nodes if node.id == node_id), None)

    def children_of(self, node_id: str) -> list[ResourceGraphNode]:
        child_ids = [edge.target_id for edge in self.edges if edge.source_id == node_id]
        return [node for node in self.nodes if node.id in child_ids]

    def layers(self) -> list[list[ResourceGraphNode]]:
        """Group nodes by kind rank, preserving insertion order within a layer."""
        ordered = sorted(self.nodes, key=lambda node: kind_rank(node.kind))
        return [list(group) for _, group in groupby(ordered, key=lambda node: kind_rank(node.kind))]
