"""Deployment relationship graph builder.

Starting from one Deployment, collects the objects that belong to it or
point at it and links them parent to child:

    Ingress -> Service -> Pod (or Deployment when no pod matches)
    HPA -> Deployment -> ReplicaSet -> Pod
    Deployment -> ConfigMap / Secret / PVC / ServiceAccount
"""

from __future__ import annotations

from typing import Any

from kubedash.controllers.cluster.parsers.pod_parser import effective_pod_status
from kubedash.models.core.graph_info import (
    ResourceGraph,
    ResourceGraphEdge,
    ResourceGraphNode,
)


def _name(obj: dict[str, Any]) -> str:
    return obj.get("metadata", {}).get("name", "")


def _owned_by(obj: dict[str, Any], owner_uids: set[str]) -> bool:
    refs = obj.get("metadata", {}).get("ownerReferences") or []
    return any(ref.get("uid") in owner_uids for ref in refs)


def selector_matches(selector: dict[str, str] | None, labels: dict[str, str] | None) -> bool:
    """True when a non-empty selector is a subset of ``labels``."""
    if not selector:
        return False
    labels = labels or {}
    return all(labels.get(key) == value for key, value in selector.items())


def ingress_backend_services(ingress: dict[str, Any]) -> set[str]:
    """Names of services used as backends anywhere in an ingress."""
    spec = ingress.get("spec", {})
    backends = [spec.get("defaultBackend") or {}]
    for rule in spec.get("rules") or []:
        for path in (rule.get("http") or {}).get("paths") or []:
            backends.append(path.get("backend") or {})
    names = set()
    for backend in backends:
        service = backend.get("service") or {}
        if service.get("name"):
            names.add(service["name"])
        # networking.k8s.io/v1beta1 shape
        if backend.get("serviceName"):
            names.add(backend["serviceName"])
    return names


def pod_template_references(template_spec: dict[str, Any]) -> dict[str, set[str]]:
    """ConfigMaps, Secrets, PVCs and ServiceAccount referenced by a pod spec."""
    refs: dict[str, set[str]] = {
        "ConfigMap": set(),
        "Secret": set(),
        "PVC": set(),
        "ServiceAccount": set(),
    }

    for volume in template_spec.get("volumes") or []:
        if (volume.get("configMap") or {}).get("name"):
            refs["ConfigMap"].add(volume["configMap"]["name"])
        if (volume.get("secret") or {}).get("secretName"):
            refs["Secret"].add(volume["secret"]["secretName"])
        if (volume.get("persistentVolumeClaim") or {}).get("claimName"):
            refs["PVC"].add(volume["persistentVolumeClaim"]["claimName"])
        for source in (volume.get("projected") or {}).get("sources") or []:
            if (source.get("configMap") or {}).get("name"):
                refs["ConfigMap"].add(source["configMap"]["name"])
            if (source.get("secret") or {}).get("name"):
                refs["Secret"].add(source["secret"]["name"])

    containers = (template_spec.get("initContainers") or []) + (
        template_spec.get("containers") or []
    )
    for container in containers:
        for env_from in container.get("envFrom") or []:
            if (env_from.get("configMapRef") or {}).get("name"):
                refs["ConfigMap"].add(env_from["configMapRef"]["name"])
            if (env_from.get("secretRef") or {}).get("name"):
                refs["Secret"].add(env_from["secretRef"]["name"])
        for env in container.get("env") or []:
            value_from = env.get("valueFrom") or {}
            if (value_from.get("configMapKeyRef") or {}).get("name"):
                refs["ConfigMap"].add(value_from["configMapKeyRef"]["name"])
            if (value_from.get("secretKeyRef") or {}).get("name"):
                refs["Secret"].add(value_from["secretKeyRef"]["name"])

    for pull_secret in template_spec.get("imagePullSecrets") or []:
        if pull_secret.get("name"):
            refs["Secret"].add(pull_secret["name"])

    if template_spec.get("serviceAccountName"):
        refs["ServiceAccount"].add(template_spec["serviceAccountName"])
    return refs


def _deployment_status(deployment: dict[str, Any]) -> str:
    for condition in deployment.get("status", {}).get("conditions") or []:
        if condition.get("type") == "Available":
            return "Available" if condition.get("status") == "True" else "Unavailable"
    return "Unknown"


def _replica_set_status(replica_set: dict[str, Any]) -> str:
    ready = int(replica_set.get("status", {}).get("readyReplicas") or 0)
    desired = int(replica_set.get("spec", {}).get("replicas") or 0)
    return f"{ready}/{desired}"


class _GraphBuilder:
    def __init__(self) -> None:
        self.nodes: dict[str, ResourceGraphNode] = {}
        self.edges: list[ResourceGraphEdge] = []

    def add_node(self, kind: str, name: str, status: str | None = None) -> str:
        node_id = ResourceGraph.node_id(kind, name)
        if node_id not in self.nodes:
            self.nodes[node_id] = ResourceGraphNode(
                id=node_id, kind=kind, name=name, status=status
            )
        return node_id

    def add_edge(self, source_id: str, target_id: str) -> None:
        edge = ResourceGraphEdge(source_id=source_id, target_id=target_id)
        if edge not in self.edges:
            self.edges.append(edge)

    def build(self) -> ResourceGraph:
        return ResourceGraph(nodes=list(self.nodes.values()), edges=self.edges)


class GraphParser:
    """Builds a ResourceGraph around one deployment."""

    def build_deployment_graph(
        self,
        deployment: dict[str, Any],
        *,
        replica_sets: list[dict[str, Any]],
        pods: list[dict[str, Any]],
        services: list[dict[str, Any]],
        ingresses: list[dict[str, Any]],
        hpas: list[dict[str, Any]],
    ) -> ResourceGraph:
        builder = _GraphBuilder()
        deployment_name = _name(deployment)
        deployment_uid = deployment.get("metadata", {}).get("uid") or ""
        template = deployment.get("spec", {}).get("template") or {}
        template_labels = (template.get("metadata") or {}).get("labels") or {}

        deployment_id = builder.add_node(
            "Deployment", deployment_name, _deployment_status(deployment)
        )

        owned_replica_sets = [rs for rs in replica_sets if _owned_by(rs, {deployment_uid})]
        replica_set_uids = {rs.get("metadata", {}).get("uid") for rs in owned_replica_sets}
        owned_pods = [pod for pod in pods if _owned_by(pod, replica_set_uids)]
        pod_ids_by_uid: dict[str, str] = {}

        for replica_set in owned_replica_sets:
            rs_id = builder.add_node(
                "ReplicaSet", _name(replica_set), _replica_set_status(replica_set)
            )
            builder.add_edge(deployment_id, rs_id)
            rs_uid = replica_set.get("metadata", {}).get("uid")
            for pod in owned_pods:
                if _owned_by(pod, {rs_uid}):
                    pod_id = builder.add_node("Pod", _name(pod), effective_pod_status(pod))
                    pod_ids_by_uid[pod.get("metadata", {}).get("uid") or pod_id] = pod_id
                    builder.add_edge(rs_id, pod_id)

        matched_services = [
            svc
            for svc in services
            if selector_matches((svc.get("spec") or {}).get("selector"), template_labels)
        ]
        for service in matched_services:
            service_id = builder.add_node("Service", _name(service), service.get("spec", {}).get("type"))
            selector = service.get("spec", {}).get("selector")
            pod_targets = [
                pod_ids_by_uid.get(pod.get("metadata", {}).get("uid") or "")
                for pod in owned_pods
                if selector_matches(selector, pod.get("metadata", {}).get("labels"))
            ]
            pod_targets = [pod_id for pod_id in pod_targets if pod_id]
            for pod_id in pod_targets or [deployment_id]:
                builder.add_edge(service_id, pod_id)

        service_names = {_name(svc) for svc in matched_services}
        for ingress in ingresses:
            backends = ingress_backend_services(ingress) & service_names
            if not backends:
                continue
            ingress_id = builder.add_node("Ingress", _name(ingress))
            for service_name in sorted(backends):
                builder.add_edge(ingress_id, ResourceGraph.node_id("Service", service_name))

        for hpa in hpas:
            target = hpa.get("spec", {}).get("scaleTargetRef") or {}
            if target.get("kind") == "Deployment" and target.get("name") == deployment_name:
                hpa_id = builder.add_node("HPA", _name(hpa))
                builder.add_edge(hpa_id, deployment_id)

        references = pod_template_references(template.get("spec") or {})
        for kind, names in references.items():
            for name in sorted(names):
                builder.add_edge(deployment_id, builder.add_node(kind, name))

        return builder.build()
