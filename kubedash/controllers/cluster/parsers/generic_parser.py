"""Generic resource parser - one screen type for many simpler kinds.

Each supported kind contributes a column builder returning the row status
and an ordered mapping of kind-specific summary columns.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from kubedash.constants.enums import JobStatus
from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.resource_info import GenericResourceView

ColumnResult = tuple[str | None, dict[str, str]]
ColumnBuilder = Callable[[dict[str, Any]], ColumnResult]

_DEFAULT_CLASS_ANNOTATION = "storageclass.kubernetes.io/is-default-class"


def _int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _ratio(ready: int, desired: int) -> str:
    return f"{ready}/{desired}"


def _joined(values: Any) -> str:
    if not isinstance(values, list):
        return ""
    return ", ".join(str(v) for v in values if v)


# ============================================================================
# Column builders
# ============================================================================


def namespace_columns(obj: dict[str, Any]) -> ColumnResult:
    return obj.get("status", {}).get("phase") or "Active", {}


def config_map_columns(obj: dict[str, Any]) -> ColumnResult:
    count = len(obj.get("data") or {}) + len(obj.get("binaryData") or {})
    return None, {"Data": str(count)}


def secret_columns(obj: dict[str, Any]) -> ColumnResult:
    return None, {
        "Type": obj.get("type") or "",
        "Data": str(len(obj.get("data") or {})),
    }


def stateful_set_columns(obj: dict[str, Any]) -> ColumnResult:
    ready = _int(obj.get("status", {}).get("readyReplicas"))
    desired = _int(obj.get("spec", {}).get("replicas"))
    return _ratio(ready, desired), {"Ready": _ratio(ready, desired)}


def daemon_set_columns(obj: dict[str, Any]) -> ColumnResult:
    status = obj.get("status", {})
    desired = _int(status.get("desiredNumberScheduled"))
    ready = _int(status.get("numberReady"))
    return _ratio(ready, desired), {"Desired": str(desired), "Ready": str(ready)}


def replica_set_columns(obj: dict[str, Any]) -> ColumnResult:
    ready = _int(obj.get("status", {}).get("readyReplicas"))
    desired = _int(obj.get("spec", {}).get("replicas"))
    return _ratio(ready, desired), {"Ready": _ratio(ready, desired)}


def job_status(obj: dict[str, Any]) -> JobStatus:
    """Precedence: active > succeeded >= completions > failed > pending."""
    status = obj.get("status", {})
    succeeded = _int(status.get("succeeded"))
    completions = _int(obj.get("spec", {}).get("completions"), default=1)
    if _int(status.get("active")) > 0:
        return JobStatus.RUNNING
    if succeeded >= completions:
        return JobStatus.COMPLETE
    if _int(status.get("failed")) > 0:
        return JobStatus.FAILED
    return JobStatus.PENDING


def job_columns(obj: dict[str, Any]) -> ColumnResult:
    succeeded = _int(obj.get("status", {}).get("succeeded"))
    completions = _int(obj.get("spec", {}).get("completions"), default=1)
    status = job_status(obj).value
    return status, {"Completions": _ratio(succeeded, completions), "Status": status}


def cron_job_columns(obj: dict[str, Any]) -> ColumnResult:
    spec = obj.get("spec", {})
    status = "Suspended" if spec.get("suspend") is True else "Active"
    active = obj.get("status", {}).get("active") or []
    return status, {
        "Schedule": spec.get("schedule") or "",
        "Active": str(len(active)),
    }


def ingress_columns(obj: dict[str, Any]) -> ColumnResult:
    rules = obj.get("spec", {}).get("rules") or []
    hosts = [rule.get("host") for rule in rules if isinstance(rule, dict)]
    return None, {"Hosts": _joined(hosts)}


def endpoints_columns(obj: dict[str, Any]) -> ColumnResult:
    count = sum(len(subset.get("addresses") or []) for subset in obj.get("subsets") or [])
    return None, {"Endpoints": str(count)}


def network_policy_columns(obj: dict[str, Any]) -> ColumnResult:
    return None, {"Policy Types": _joined(obj.get("spec", {}).get("policyTypes"))}


def persistent_volume_columns(obj: dict[str, Any]) -> ColumnResult:
    spec = obj.get("spec", {})
    claim_ref = spec.get("claimRef")
    claim = f"{claim_ref.get('namespace')}/{claim_ref.get('name')}" if claim_ref else ""
    return obj.get("status", {}).get("phase"), {
        "Capacity": str((spec.get("capacity") or {}).get("storage") or ""),
        "Access Modes": _joined(spec.get("accessModes")),
        "Reclaim": spec.get("persistentVolumeReclaimPolicy") or "",
        "Claim": claim,
    }


def persistent_volume_claim_columns(obj: dict[str, Any]) -> ColumnResult:
    spec = obj.get("spec", {})
    status = obj.get("status", {})
    return status.get("phase"), {
        "Capacity": str((status.get("capacity") or {}).get("storage") or ""),
        "Access Modes": _joined(status.get("accessModes")),
        "Storage Class": spec.get("storageClassName") or "",
        "Volume": spec.get("volumeName") or "",
    }


def storage_class_columns(obj: dict[str, Any]) -> ColumnResult:
    annotations = obj.get("metadata", {}).get("annotations") or {}
    is_default = _DEFAULT_CLASS_ANNOTATION in annotations
    return "Default" if is_default else None, {
        "Provisioner": obj.get("provisioner") or "",
        "Reclaim Policy": obj.get("reclaimPolicy") or "",
        "Binding Mode": obj.get("volumeBindingMode") or "",
    }


class GenericResourceParser(BaseParser):
    """Builds GenericResourceView rows from a column builder."""

    def parse(
        self,
        obj: dict[str, Any],
        columns: ColumnBuilder,
        *,
        namespaced: bool = True,
    ) -> GenericResourceView:
        metadata = obj.get("metadata", {})
        status, extra_columns = columns(obj)
        return GenericResourceView(
            uid=metadata.get("uid") or "",
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") if namespaced else None,
            status=status,
            age=self.age(metadata.get("creationTimestamp")),
            labels=metadata.get("labels") or {},
            extra_columns=extra_columns,
        )

    def parse_all(
        self,
        items: list[dict[str, Any]],
        columns: ColumnBuilder,
        *,
        namespaced: bool = True,
    ) -> list[GenericResourceView]:
        return [self.parse(obj, columns, namespaced=namespaced) for obj in items]
