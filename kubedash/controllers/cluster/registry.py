"""Static table of the resource kinds the dashboard understands.

Every per-kind decision (kubectl resource name, scope, delete support,
generic screen columns) lives here instead of in scattered branches.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kubedash.controllers.cluster.parsers.generic_parser import (
    ColumnBuilder,
    config_map_columns,
    cron_job_columns,
    daemon_set_columns,
    endpoints_columns,
    ingress_columns,
    job_columns,
    namespace_columns,
    network_policy_columns,
    persistent_volume_claim_columns,
    persistent_volume_columns,
    replica_set_columns,
    secret_columns,
    stateful_set_columns,
    storage_class_columns,
)
from kubedash.controllers.cluster.provider import UnsupportedKindError


@dataclass(frozen=True)
class ResourceKind:
    """One supported kind.

    Attributes:
        name: Canonical kind name (``"Deployment"``).
        resource: Fully qualified kubectl resource (``"deployments.apps"``).
        namespaced: Whether objects live in a namespace.
        deletable: Whether the dashboard may delete objects of this kind.
        aliases: Extra lowercase names accepted by ``resolve_kind``.
        columns: Column builder for the generic resource screen, if any.
    """

    name: str
    resource: str
    namespaced: bool = True
    deletable: bool = False
    aliases: tuple[str, ...] = ()
    columns: ColumnBuilder | None = field(default=None, compare=False)

    @property
    def lookup_names(self) -> tuple[str, ...]:
        short = self.resource.split(".", 1)[0]
        return tuple(dict.fromkeys((self.name.lower(), short, *self.aliases)))


KINDS: tuple[ResourceKind, ...] = (
    ResourceKind("Pod", "pods", deletable=True, aliases=("po",)),
    ResourceKind("Deployment", "deployments.apps", deletable=True, aliases=("deploy",)),
    ResourceKind("Service", "services", deletable=True, aliases=("svc",)),
    ResourceKind("Node", "nodes", namespaced=False, aliases=("no",)),
    ResourceKind(
        "Namespace", "namespaces", namespaced=False, aliases=("ns",), columns=namespace_columns
    ),
    ResourceKind("Event", "events", aliases=("ev",)),
    ResourceKind(
        "ConfigMap", "configmaps", deletable=True, aliases=("cm",), columns=config_map_columns
    ),
    ResourceKind("Secret", "secrets", deletable=True, columns=secret_columns),
    ResourceKind(
        "StatefulSet", "statefulsets.apps", aliases=("sts",), columns=stateful_set_columns
    ),
    ResourceKind("DaemonSet", "daemonsets.apps", aliases=("ds",), columns=daemon_set_columns),
    ResourceKind("ReplicaSet", "replicasets.apps", aliases=("rs",), columns=replica_set_columns),
    ResourceKind("Job", "jobs.batch", deletable=True, columns=job_columns),
    ResourceKind(
        "CronJob", "cronjobs.batch", deletable=True, aliases=("cj",), columns=cron_job_columns
    ),
    ResourceKind(
        "Ingress",
        "ingresses.networking.k8s.io",
        aliases=("ing",),
        columns=ingress_columns,
    ),
    ResourceKind("Endpoints", "endpoints", aliases=("ep", "endpoint"), columns=endpoints_columns),
    ResourceKind(
        "NetworkPolicy",
        "networkpolicies.networking.k8s.io",
        aliases=("netpol",),
        columns=network_policy_columns,
    ),
    ResourceKind(
        "PersistentVolume",
        "persistentvolumes",
        namespaced=False,
        aliases=("pv",),
        columns=persistent_volume_columns,
    ),
    ResourceKind(
        "PersistentVolumeClaim",
        "persistentvolumeclaims",
        aliases=("pvc",),
        columns=persistent_volume_claim_columns,
    ),
    ResourceKind(
        "StorageClass",
        "storageclasses.storage.k8s.io",
        namespaced=False,
        aliases=("sc",),
        columns=storage_class_columns,
    ),
    ResourceKind(
        "HorizontalPodAutoscaler",
        "horizontalpodautoscalers.autoscaling",
        aliases=("hpa",),
    ),
    ResourceKind("ServiceAccount", "serviceaccounts", aliases=("sa",)),
)

_BY_NAME: dict[str, ResourceKind] = {
    lookup: kind for kind in KINDS for lookup in kind.lookup_names
}


def resolve_kind(kind: str) -> ResourceKind:
    """Look up a kind by name, plural, or short name, ignoring case.

    Raises:
        UnsupportedKindError: If the kind is not in the table.
    """
    resolved = _BY_NAME.get(kind.strip().lower())
    if resolved is None:
        raise UnsupportedKindError(f"Unsupported resource kind: {kind}")
    return resolved


def require_deletable(kind: str) -> ResourceKind:
    """Resolve ``kind`` and make sure delete is allowed for it."""
    resolved = resolve_kind(kind)
    if not resolved.deletable:
        raise UnsupportedKindError(f"Delete not supported for {resolved.name}")
    return resolved


def generic_kinds() -> tuple[ResourceKind, ...]:
    """Kinds rendered by the generic resource screen."""
    return tuple(kind for kind in KINDS if kind.columns is not None)


__all__ = [
    "KINDS",
    "ResourceKind",
    "generic_kinds",
    "require_deletable",
    "resolve_kind",
]
