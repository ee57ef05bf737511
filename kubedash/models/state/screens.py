"""Navigation targets the presentation layer can open."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PollCadence(Enum):
    """Refresh class of a screen; the interval itself comes from settings."""

    FAST = "fast"
    SLOW = "slow"
    LOGS = "logs"
    ONCE = "once"


class ScreenKind(Enum):
    """List screens, with their title, resource kind and refresh class."""

    CLUSTER_OVERVIEW = ("Cluster", None, PollCadence.SLOW)
    NODES = ("Nodes", "Node", PollCadence.SLOW)
    NAMESPACES = ("Namespaces", "Namespace", PollCadence.FAST)
    EVENTS = ("Events", "Event", PollCadence.FAST)

    PODS = ("Pods", "Pod", PollCadence.FAST)
    DEPLOYMENTS = ("Deployments", "Deployment", PollCadence.FAST)
    STATEFUL_SETS = ("StatefulSets", "StatefulSet", PollCadence.FAST)
    DAEMON_SETS = ("DaemonSets", "DaemonSet", PollCadence.FAST)
    REPLICA_SETS = ("ReplicaSets", "ReplicaSet", PollCadence.FAST)
    JOBS = ("Jobs", "Job", PollCadence.FAST)
    CRON_JOBS = ("CronJobs", "CronJob", PollCadence.FAST)

    CONFIG_MAPS = ("ConfigMaps", "ConfigMap", PollCadence.FAST)
    SECRETS = ("Secrets", "Secret", PollCadence.FAST)

    SERVICES = ("Services", "Service", PollCadence.FAST)
    INGRESSES = ("Ingresses", "Ingress", PollCadence.FAST)
    ENDPOINTS = ("Endpoints", "Endpoints", PollCadence.FAST)
    NETWORK_POLICIES = ("Network Policies", "NetworkPolicy", PollCadence.FAST)

    PERSISTENT_VOLUMES = ("Persistent Volumes", "PersistentVolume", PollCadence.FAST)
    PERSISTENT_VOLUME_CLAIMS = (
        "Persistent Volume Claims",
        "PersistentVolumeClaim",
        PollCadence.FAST,
    )
    STORAGE_CLASSES = ("Storage Classes", "StorageClass", PollCadence.FAST)

    def __init__(self, title: str, resource_kind: str | None, cadence: PollCadence) -> None:
        self.title = title
        self.resource_kind = resource_kind
        self.cadence = cadence


@dataclass(frozen=True)
class ListScreen:
    """One of the list screens."""

    kind: ScreenKind

    @property
    def title(self) -> str:
        return self.kind.title

    @property
    def cadence(self) -> PollCadence:
        return self.kind.cadence


@dataclass(frozen=True)
class ResourceDetail:
    """YAML/detail view of one object."""

    kind: str
    name: str
    namespace: str | None = None

    @property
    def title(self) -> str:
        return f"{self.kind}: {self.name}"

    @property
    def cadence(self) -> PollCadence:
        return PollCadence.ONCE


@dataclass(frozen=True)
class PodLogs:
    """Log tail of a pod (optionally one container)."""

    pod_name: str
    namespace: str
    container: str | None = None

    @property
    def title(self) -> str:
        return f"Logs: {self.pod_name}"

    @property
    def cadence(self) -> PollCadence:
        return PollCadence.LOGS


Screen = Union[ListScreen, ResourceDetail, PodLogs]

HOME_SCREEN = ListScreen(ScreenKind.CLUSTER_OVERVIEW)

__all__ = [
    "HOME_SCREEN",
    "ListScreen",
    "PodLogs",
    "PollCadence",
    "ResourceDetail",
    "Screen",
    "ScreenKind",
]
