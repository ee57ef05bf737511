"""Shared fixtures: an in-memory cluster data provider and raw object factories."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest
import pytest_asyncio

from kubedash.controllers.cluster.controller import ClusterController
from kubedash.controllers.cluster.provider import ProviderError, ResourceNotFoundError
from kubedash.controllers.cluster.registry import resolve_kind
from kubedash.controllers.connection.manager import ConnectionManager
from kubedash.models.cache.data_cache import DataCache

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _lookup(obj: dict[str, Any], dotted: str) -> Any:
    value: Any = obj
    for part in dotted.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _matches_field_selector(obj: dict[str, Any], selector: str) -> bool:
    for clause in selector.split(","):
        path, _, expected = clause.partition("=")
        if _lookup(obj, path) != expected:
            return False
    return True


class FakeLogStream:
    """LogStreamHandle fed from a list; blocks on an event once drained."""

    def __init__(self, lines: list[str] | None = None, *, follow: bool = True) -> None:
        self._lines = list(lines or [])
        self._follow = follow
        self.closed = False
        self._released = threading.Event()

    def readline(self) -> str | None:
        if self._lines and not self.closed:
            return self._lines.pop(0)
        if self._follow:
            self._released.wait(timeout=5)
        return None

    def close(self) -> None:
        self.closed = True
        self._released.set()


class FakeProvider:
    """In-memory ClusterDataProvider.

    ``failures`` maps a canonical kind name or a method name
    (``"server_version"``, ``"delete"``, ``"metrics"``, ``"open_log_stream"``)
    to the exception that call should raise.
    """

    def __init__(
        self,
        objects: dict[str, list[dict[str, Any]]] | None = None,
        *,
        version: str = "1.29",
        address: str = "https://k8s.example.test:6443",
    ) -> None:
        self.objects: dict[str, list[dict[str, Any]]] = {
            resolve_kind(kind).name: list(items) for kind, items in (objects or {}).items()
        }
        self.version = version
        self.address = address
        self.failures: dict[str, Exception] = {}
        self.metrics: list[dict[str, Any]] = []
        self.logs = ""
        self.stream: FakeLogStream | None = None
        self.calls: list[tuple[Any, ...]] = []
        self.deleted: list[tuple[str, str, str | None]] = []
        self.closed = False

    def _maybe_fail(self, key: str) -> None:
        error = self.failures.get(key)
        if error is not None:
            raise error

    def set_objects(self, kind: str, items: list[dict[str, Any]]) -> None:
        self.objects[resolve_kind(kind).name] = list(items)

    def server_version(self) -> str:
        self.calls.append(("server_version",))
        self._maybe_fail("server_version")
        return self.version

    def server_address(self) -> str:
        return self.address

    def close(self) -> None:
        self.closed = True

    def list(
        self,
        kind: str,
        namespace: str | None = None,
        *,
        field_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        resource_kind = resolve_kind(kind)
        self.calls.append(("list", resource_kind.name, namespace, field_selector))
        self._maybe_fail(resource_kind.name)
        items = self.objects.get(resource_kind.name, [])
        if namespace and resource_kind.namespaced:
            items = [i for i in items if i.get("metadata", {}).get("namespace") == namespace]
        if field_selector:
            items = [i for i in items if _matches_field_selector(i, field_selector)]
        return list(items)

    def get(self, kind: str, name: str, namespace: str | None = None) -> dict[str, Any]:
        resource_kind = resolve_kind(kind)
        self.calls.append(("get", resource_kind.name, name, namespace))
        self._maybe_fail(resource_kind.name)
        for item in self.objects.get(resource_kind.name, []):
            metadata = item.get("metadata", {})
            if metadata.get("name") == name and (
                namespace is None or metadata.get("namespace") in (None, namespace)
            ):
                return item
        raise ResourceNotFoundError(f"{resource_kind.name} {name} not found")

    def delete(self, kind: str, name: str, namespace: str | None = None) -> None:
        self._maybe_fail("delete")
        self.deleted.append((resolve_kind(kind).name, name, namespace))

    def get_logs(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 1000,
    ) -> str:
        self.calls.append(("get_logs", pod_name, namespace, container, tail_lines))
        self._maybe_fail("get_logs")
        return self.logs

    def open_log_stream(
        self,
        pod_name: str,
        namespace: str,
        container: str | None = None,
        tail_lines: int = 100,
    ) -> FakeLogStream:
        self._maybe_fail("open_log_stream")
        if self.stream is None:
            self.stream = FakeLogStream()
        return self.stream

    def list_pod_metrics(self, namespace: str | None = None) -> list[dict[str, Any]]:
        self.calls.append(("metrics", namespace))
        self._maybe_fail("metrics")
        return list(self.metrics)


# =============================================================================
# Raw object factories
# =============================================================================


def make_pod(
    name: str,
    *,
    namespace: str = "default",
    phase: str | None = "Running",
    node: str | None = "node-1",
    uid: str | None = None,
    labels: dict[str, str] | None = None,
    owner_uid: str | None = None,
    containers: list[dict[str, Any]] | None = None,
    container_statuses: list[dict[str, Any]] | None = None,
    created: str = "2024-05-01T11:00:00Z",
) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": namespace,
        "uid": uid or f"uid-pod-{name}",
        "labels": labels or {},
        "creationTimestamp": created,
    }
    if owner_uid:
        metadata["ownerReferences"] = [{"kind": "ReplicaSet", "uid": owner_uid}]
    status: dict[str, Any] = {}
    if phase is not None:
        status["phase"] = phase
    if container_statuses is not None:
        status["containerStatuses"] = container_statuses
    spec: dict[str, Any] = {"containers": containers or [{"name": "app", "image": "nginx:1.25"}]}
    if node:
        spec["nodeName"] = node
    return {"metadata": metadata, "spec": spec, "status": status}


def make_node(
    name: str,
    *,
    cpu: str = "4",
    memory: str = "16Gi",
    pods: str = "110",
    ready: bool = True,
    labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "uid": f"uid-node-{name}",
            "labels": labels or {},
            "creationTimestamp": "2024-04-01T12:00:00Z",
        },
        "status": {
            "allocatable": {"cpu": cpu, "memory": memory, "pods": pods},
            "conditions": [{"type": "Ready", "status": "True" if ready else "False"}],
            "nodeInfo": {
                "kubeletVersion": "v1.29.2",
                "osImage": "Ubuntu 22.04.4 LTS",
                "architecture": "amd64",
                "containerRuntimeVersion": "containerd://1.7.13",
            },
        },
    }


def make_named(kind_uid: str, name: str, namespace: str | None = "default") -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "uid": f"uid-{kind_uid}-{name}"}
    if namespace:
        metadata["namespace"] = namespace
    return {"metadata": metadata, "spec": {}, "status": {}}


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def pod_factory() -> Callable[..., dict[str, Any]]:
    return make_pod


@pytest.fixture
def node_factory() -> Callable[..., dict[str, Any]]:
    return make_node


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider(
        {
            "Node": [make_node("node-1"), make_node("node-2", cpu="2", memory="8Gi")],
            "Namespace": [make_named("ns", "default", None), make_named("ns", "kube-system", None)],
            "Pod": [
                make_pod("web-1"),
                make_pod("web-2", node="node-2"),
                make_pod("job-1", phase="Pending", node=None),
            ],
        }
    )


@pytest.fixture
def provider_factory(fake_provider: FakeProvider) -> Callable[[str | None], FakeProvider]:
    def factory(context: str | None) -> FakeProvider:
        fake_provider.calls.append(("factory", context))
        return fake_provider

    return factory


@pytest.fixture
def data_cache() -> DataCache:
    return DataCache()


@pytest_asyncio.fixture
async def connection(
    provider_factory: Callable[[str | None], FakeProvider], data_cache: DataCache
) -> ConnectionManager:
    manager = ConnectionManager(provider_factory, cache=data_cache)
    result = await manager.connect("test-cluster")
    assert result.success
    return manager


@pytest.fixture
def controller(
    connection: ConnectionManager, data_cache: DataCache, fixed_clock: Callable[[], datetime]
) -> ClusterController:
    return ClusterController(connection, cache=data_cache, clock=fixed_clock)


@pytest.fixture
def wait_until() -> Callable[..., Any]:
    """Return a coroutine function polling ``predicate`` until it holds."""

    async def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("Condition not met before timeout")
            await asyncio.sleep(0.005)

    return _wait


@pytest.fixture
def failing_error() -> ProviderError:
    return ProviderError("Unable to connect to the server: dial tcp 10.0.0.1:443: i/o timeout")


@pytest.fixture
def log_stream_factory() -> type[FakeLogStream]:
    return FakeLogStream


@pytest.fixture
def provider_class() -> type[FakeProvider]:
    return FakeProvider
