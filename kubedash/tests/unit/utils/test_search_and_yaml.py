"""Tests for search filtering and YAML rendering."""

from __future__ import annotations

import yaml

from kubedash.models.core.pod_info import PodView
from kubedash.utils.search import filter_by_query, matches_query
from kubedash.utils.yaml_render import render_resource_yaml


def _pod(name: str, namespace: str = "default", status: str = "Running") -> PodView:
    return PodView(uid=f"uid-{name}", name=name, namespace=namespace, status=status)


class TestSearch:
    """Tests for matches_query and filter_by_query."""

    def test_blank_query_matches_everything(self) -> None:
        assert matches_query(_pod("web"), "   ")
        assert len(filter_by_query([_pod("a"), _pod("b")], "")) == 2

    def test_case_insensitive(self) -> None:
        assert matches_query(_pod("Web-Frontend"), "frontend")

    def test_matches_any_field(self) -> None:
        pods = [
            _pod("api", namespace="payments"),
            _pod("web", status="CrashLoopBackOff"),
            _pod("db"),
        ]
        assert [p.name for p in filter_by_query(pods, "PAYMENTS")] == ["api"]
        assert [p.name for p in filter_by_query(pods, "crashloop")] == ["web"]
        assert filter_by_query(pods, "nothing-matches") == []


class TestRenderResourceYaml:
    """Tests for render_resource_yaml."""

    def test_strips_managed_fields_without_mutating_input(self) -> None:
        resource = {
            "kind": "Pod",
            "metadata": {"name": "web", "managedFields": [{"manager": "kubectl"}]},
            "spec": {"containers": [{"name": "app"}]},
        }

        text = render_resource_yaml(resource)

        assert "managedFields" not in text
        assert "managedFields" in resource["metadata"]
        assert yaml.safe_load(text)["metadata"]["name"] == "web"

    def test_keeps_key_order(self) -> None:
        text = render_resource_yaml({"kind": "Pod", "apiVersion": "v1", "metadata": {}})
        assert text.index("kind") < text.index("apiVersion")

    def test_managed_fields_kept_on_request(self) -> None:
        resource = {"metadata": {"managedFields": []}}
        assert "managedFields" in render_resource_yaml(resource, strip_managed_fields=False)
