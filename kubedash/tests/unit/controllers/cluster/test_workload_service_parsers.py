"""Tests for deployment and service parsers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from kubedash.controllers.cluster.parsers.service_parser import (
    ServiceParser,
    format_service_ports,
)
from kubedash.controllers.cluster.parsers.workload_parser import WorkloadParser


class TestWorkloadParser:
    """Tests for WorkloadParser."""

    def test_parse_deployment(self, fixed_clock: Callable[[], datetime]) -> None:
        deployment = {
            "metadata": {
                "name": "web",
                "namespace": "shop",
                "uid": "uid-deploy-web",
                "labels": {"app": "web"},
                "creationTimestamp": "2024-05-01T10:00:00Z",
            },
            "spec": {"replicas": 3, "strategy": {"type": "RollingUpdate"}},
            "status": {
                "readyReplicas": 2,
                "updatedReplicas": 3,
                "availableReplicas": 2,
                "conditions": [
                    {"type": "Available", "status": "True"},
                    {"type": "Progressing", "status": "True"},
                ],
            },
        }

        view = WorkloadParser(fixed_clock).parse_deployment(deployment)

        assert view.name == "web"
        assert view.namespace == "shop"
        assert view.ready == "2/3"
        assert view.up_to_date == 3
        assert view.available == 2
        assert view.strategy == "RollingUpdate"
        assert view.age == "2h0m"
        assert view.conditions == ["Available=True", "Progressing=True"]

    def test_parse_deployment_scaled_to_zero(self) -> None:
        view = WorkloadParser().parse_deployment(
            {"metadata": {"name": "idle"}, "spec": {"replicas": 0}, "status": {}}
        )
        assert view.ready == "0/0"
        assert view.available == 0
        assert view.conditions == []


class TestServiceParser:
    """Tests for ServiceParser."""

    def test_format_ports(self) -> None:
        ports = [
            {"port": 80, "protocol": "TCP", "nodePort": 30080},
            {"port": 53, "protocol": "UDP"},
            {"port": 443, "nodePort": 0},
        ]
        assert format_service_ports(ports) == "80:30080/TCP, 53/UDP, 443/TCP"

    def test_format_no_ports(self) -> None:
        assert format_service_ports(None) == ""

    def test_parse_service(self, fixed_clock: Callable[[], datetime]) -> None:
        service = {
            "metadata": {"name": "web", "namespace": "shop", "uid": "uid-svc-web"},
            "spec": {
                "type": "ClusterIP",
                "clusterIP": "10.96.0.12",
                "selector": {"app": "web"},
                "ports": [{"port": 8080, "protocol": "TCP"}],
            },
        }

        view = ServiceParser(fixed_clock).parse_service(service)

        assert view.type == "ClusterIP"
        assert view.cluster_ip == "10.96.0.12"
        assert view.ports == "8080/TCP"
        assert view.selector == {"app": "web"}
        assert view.age == ""
