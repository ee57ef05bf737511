"""Tests for event and cluster overview parsers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from kubedash.controllers.cluster.parsers.cluster_parser import ClusterParser
from kubedash.controllers.cluster.parsers.event_parser import EventParser


def _event(
    name: str,
    created: str,
    *,
    kind: str = "Pod",
    obj: str = "web-1",
    **fields: Any,
) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "uid": f"uid-ev-{name}",
            "namespace": "default",
            "creationTimestamp": created,
        },
        "involvedObject": {"kind": kind, "name": obj},
        **fields,
    }


class TestEventParser:
    """Tests for EventParser class."""

    @pytest.fixture
    def parser(self, fixed_clock: Callable[[], datetime]) -> EventParser:
        return EventParser(fixed_clock)

    def test_parse_event(self, parser: EventParser) -> None:
        event = _event(
            "e1",
            "2024-05-01T11:00:00Z",
            type="Warning",
            reason="BackOff",
            message="Back-off restarting failed container",
            count=4,
            firstTimestamp="2024-05-01T10:00:00Z",
            lastTimestamp="2024-05-01T11:55:00Z",
        )

        view = parser.parse_event(event)

        assert view.type == "Warning"
        assert view.is_warning
        assert view.reason == "BackOff"
        assert view.object_ref == "Pod/web-1"
        assert view.count == 4
        assert view.first_seen == "2h0m"
        assert view.last_seen == "5m"

    def test_defaults(self, parser: EventParser) -> None:
        """Missing type, count and timestamps fall back sensibly."""
        view = parser.parse_event(_event("e1", "2024-05-01T11:59:00Z"))

        assert view.type == "Normal"
        assert view.count == 1
        assert view.first_seen == "1m"
        assert view.last_seen == "1m"

    def test_newest_first(self, parser: EventParser) -> None:
        events = [
            _event("old", "2024-05-01T09:00:00Z"),
            _event("new", "2024-05-01T11:00:00Z"),
            _event("mid", "2024-05-01T10:00:00Z"),
            _event("undated", ""),
        ]

        views = parser.parse_events(events)

        assert [v.uid for v in views] == [
            "uid-ev-new",
            "uid-ev-mid",
            "uid-ev-old",
            "uid-ev-undated",
        ]

    def test_filter_for_node(self) -> None:
        events = [
            _event("a", "2024-05-01T11:00:00Z", kind="Node", obj="node-1"),
            _event("b", "2024-05-01T11:00:00Z", kind="Node", obj="node-2"),
            _event("c", "2024-05-01T11:00:00Z", kind="Pod", obj="node-1"),
        ]
        filtered = EventParser.filter_for_node(events, "node-1")
        assert [e["metadata"]["name"] for e in filtered] == ["a"]


class TestClusterParser:
    """Tests for ClusterParser."""

    def test_histogram_counts_phases(self, pod_factory: Callable[..., dict[str, Any]]) -> None:
        """Two running and one pending pod give {2, 1, 0, 0}."""
        pods = [
            pod_factory("a"),
            pod_factory("b"),
            pod_factory("c", phase="Pending", node=None),
        ]

        summary = ClusterParser().parse_summary(
            name="prod",
            server="https://k8s.example.test:6443",
            version="1.29",
            nodes=[{}, {}],
            namespaces=[{}, {}, {}],
            pods=pods,
            deployments=[{}],
            services=[],
        )

        assert summary.name == "prod"
        assert summary.nodes_count == 2
        assert summary.namespaces_count == 3
        assert summary.pods_count == 3
        assert summary.deployments_count == 1
        assert summary.services_count == 0
        assert summary.histogram == {"running": 2, "pending": 1, "failed": 0, "succeeded": 0}

    def test_unknown_phase_only_in_total(self, pod_factory: Callable[..., dict[str, Any]]) -> None:
        summary = ClusterParser().parse_summary(
            name="",
            server="",
            version="",
            nodes=[],
            namespaces=[],
            pods=[pod_factory("x", phase="Unknown"), pod_factory("y", phase=None)],
            deployments=[],
            services=[],
        )
        assert summary.pods_count == 2
        assert sum(summary.histogram.values()) == 0
