"""Pod parser for cluster controller - derives display status and container rows."""

from __future__ import annotations

from typing import Any

from kubedash.constants.defaults import NONE_PLACEHOLDER
from kubedash.constants.enums import PodPhase
from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.pod_info import ContainerView, PodView


def container_state_label(container_status: dict[str, Any] | None) -> str:
    """Label for a container's current state."""
    if not container_status:
        return "Unknown"
    state = container_status.get("state") or {}
    if state.get("running") is not None:
        return "Running"
    if state.get("waiting") is not None:
        return state["waiting"].get("reason") or "Waiting"
    if state.get("terminated") is not None:
        return state["terminated"].get("reason") or "Terminated"
    return "Unknown"


def _ordered_statuses(pod: dict[str, Any]) -> list[dict[str, Any]]:
    """Container statuses in container declaration order, unknown names last."""
    statuses = pod.get("status", {}).get("containerStatuses") or []
    declared = [c.get("name") for c in pod.get("spec", {}).get("containers") or []]
    position = {name: index for index, name in enumerate(declared)}
    return sorted(statuses, key=lambda cs: position.get(cs.get("name"), len(declared)))


def effective_pod_status(pod: dict[str, Any]) -> str:
    """Phase, overridden by the first container exposing a reason.

    A waiting reason always wins (CrashLoopBackOff, ImagePullBackOff, ...).
    A terminated reason wins only when the pod has not Succeeded, so a
    finished pod keeps showing Succeeded instead of "Completed".
    """
    phase = pod.get("status", {}).get("phase")
    if not phase:
        return "Unknown"
    for cs in _ordered_statuses(pod):
        state = cs.get("state") or {}
        waiting_reason = (state.get("waiting") or {}).get("reason")
        if waiting_reason:
            return waiting_reason
        terminated_reason = (state.get("terminated") or {}).get("reason")
        if terminated_reason and phase != PodPhase.SUCCEEDED.value:
            return terminated_reason
    return phase


class PodParser(BaseParser):
    """Parses pod data into PodView records."""

    def parse_containers(self, pod: dict[str, Any]) -> list[ContainerView]:
        statuses = {
            cs.get("name"): cs
            for cs in pod.get("status", {}).get("containerStatuses") or []
        }
        containers = []
        for container in pod.get("spec", {}).get("containers") or []:
            cs = statuses.get(container.get("name"))
            containers.append(
                ContainerView(
                    name=container.get("name", ""),
                    image=container.get("image") or "",
                    ready=bool(cs.get("ready")) if cs else False,
                    restart_count=int(cs.get("restartCount") or 0) if cs else 0,
                    state=container_state_label(cs),
                )
            )
        return containers

    def parse_pod(self, pod: dict[str, Any]) -> PodView:
        metadata = pod.get("metadata", {})
        containers = self.parse_containers(pod)
        ready_count = sum(1 for c in containers if c.ready)
        return PodView(
            uid=metadata.get("uid") or "",
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or "",
            status=effective_pod_status(pod),
            ready=f"{ready_count}/{len(containers)}",
            restarts=sum(c.restart_count for c in containers),
            age=self.age(metadata.get("creationTimestamp")),
            node=pod.get("spec", {}).get("nodeName") or NONE_PLACEHOLDER,
            ip=pod.get("status", {}).get("podIP") or NONE_PLACEHOLDER,
            labels=metadata.get("labels") or {},
            containers=containers,
        )

    def parse_pods(self, pods: list[dict[str, Any]]) -> list[PodView]:
        return [self.parse_pod(pod) for pod in pods]
