"""Node parser for cluster controller - parses node data into structured formats."""

from __future__ import annotations

from typing import Any

from kubedash.constants.defaults import NONE_PLACEHOLDER
from kubedash.constants.enums import NodeStatus
from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.node_info import NodeView
from kubedash.utils.resource_parser import parse_cpu_to_millis, parse_memory_to_bytes


class NodeParser(BaseParser):
    """Parses node data into structured formats."""

    _ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"

    def _get_roles(self, labels: dict[str, str]) -> str:
        roles = [
            key.removeprefix(self._ROLE_LABEL_PREFIX)
            for key in labels
            if key.startswith(self._ROLE_LABEL_PREFIX)
        ]
        return ", ".join(roles) or NONE_PLACEHOLDER

    @staticmethod
    def _is_ready(status: dict[str, Any]) -> bool:
        for condition in status.get("conditions") or []:
            if condition.get("type") == "Ready":
                return condition.get("status") == "True"
        return False

    def parse_node(self, node: dict[str, Any]) -> NodeView:
        """Parse a single node into NodeView.

        Args:
            node: Raw node dictionary from API

        Returns:
            NodeView object.
        """
        metadata = node.get("metadata", {})
        status = node.get("status", {})
        labels = metadata.get("labels") or {}
        node_info = status.get("nodeInfo") or {}
        allocatable = status.get("allocatable") or {}

        return NodeView(
            uid=metadata.get("uid") or "",
            name=metadata.get("name", ""),
            status=(NodeStatus.READY if self._is_ready(status) else NodeStatus.NOT_READY).value,
            roles=self._get_roles(labels),
            version=node_info.get("kubeletVersion") or "",
            os=node_info.get("osImage") or "",
            arch=node_info.get("architecture") or "",
            container_runtime=node_info.get("containerRuntimeVersion") or "",
            cpu=str(allocatable.get("cpu") or ""),
            memory=str(allocatable.get("memory") or ""),
            pods=str(allocatable.get("pods") or ""),
            age=self.age(metadata.get("creationTimestamp")),
            labels=labels,
        )

    def parse_nodes(self, nodes: list[dict[str, Any]]) -> list[NodeView]:
        return [self.parse_node(node) for node in nodes]

    @staticmethod
    def allocatable_totals(nodes: list[dict[str, Any]]) -> tuple[int, int]:
        """Sum allocatable CPU (millicores) and memory (bytes) across nodes."""
        cpu_total = 0
        memory_total = 0
        for node in nodes:
            allocatable = node.get("status", {}).get("allocatable")
            if not allocatable:
                continue
            cpu_total += parse_cpu_to_millis(allocatable.get("cpu", "0"))
            memory_total += parse_memory_to_bytes(allocatable.get("memory", "0"))
        return cpu_total, memory_total
