"""Service parser for cluster controller."""

from __future__ import annotations

from typing import Any

from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.service_info import ServiceView


def format_service_ports(ports: list[dict[str, Any]] | None) -> str:
    """Render ports as ``port[:nodePort]/protocol`` joined by ", "."""
    rendered = []
    for port in ports or []:
        node_port = port.get("nodePort")
        suffix = f":{node_port}" if node_port and int(node_port) > 0 else ""
        rendered.append(f"{port.get('port')}{suffix}/{port.get('protocol', 'TCP')}")
    return ", ".join(rendered)


class ServiceParser(BaseParser):
    """Parses service data into ServiceView records."""

    def parse_service(self, service: dict[str, Any]) -> ServiceView:
        metadata = service.get("metadata", {})
        spec = service.get("spec", {})
        return ServiceView(
            uid=metadata.get("uid") or "",
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "",
            type=spec.get("type") or "",
            cluster_ip=spec.get("clusterIP") or "",
            ports=format_service_ports(spec.get("ports")),
            age=self.age(metadata.get("creationTimestamp")),
            selector=spec.get("selector") or {},
            labels=metadata.get("labels") or {},
        )

    def parse_services(self, services: list[dict[str, Any]]) -> list[ServiceView]:
        return [self.parse_service(service) for service in services]
