"""Deployment parser for cluster controller."""

from __future__ import annotations

from typing import Any

from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.workload_info import DeploymentView


class WorkloadParser(BaseParser):
    """Parses deployment data into DeploymentView records."""

    def parse_deployment(self, deployment: dict[str, Any]) -> DeploymentView:
        metadata = deployment.get("metadata", {})
        spec = deployment.get("spec", {})
        status = deployment.get("status", {})
        ready = int(status.get("readyReplicas") or 0)
        desired = int(spec.get("replicas") or 0)
        return DeploymentView(
            uid=metadata.get("uid") or "",
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "",
            ready=f"{ready}/{desired}",
            up_to_date=int(status.get("updatedReplicas") or 0),
            available=int(status.get("availableReplicas") or 0),
            age=self.age(metadata.get("creationTimestamp")),
            strategy=(spec.get("strategy") or {}).get("type") or "",
            labels=metadata.get("labels") or {},
            conditions=[
                f"{condition.get('type')}={condition.get('status')}"
                for condition in status.get("conditions") or []
            ],
        )

    def parse_deployments(self, deployments: list[dict[str, Any]]) -> list[DeploymentView]:
        return [self.parse_deployment(deployment) for deployment in deployments]
