"""Pod and container view models."""

from pydantic import Field

from kubedash.models.core._base import ViewRecord


class ContainerView(ViewRecord):
    """One container of a pod, joined with its status entry."""

    name: str
    image: str = ""
    ready: bool = False
    restart_count: int = 0
    state: str = "Unknown"


class PodView(ViewRecord):
    """Pod row for the pods screen and detail panel."""

    uid: str
    name: str
    namespace: str = ""
    status: str = "Unknown"
    ready: str = "0/0"
    restarts: int = 0
    age: str = ""
    node: str = "<none>"
    ip: str = "<none>"
    labels: dict[str, str] = Field(default_factory=dict)
    containers: list[ContainerView] = Field(default_factory=list)

    @property
    def ready_count(self) -> int:
        return sum(1 for container in self.containers if container.ready)

    @property
    def container_count(self) -> int:
        return len(self.containers)

    def search_fields(self) -> tuple[str, ...]:
        return (self.name, self.namespace, self.status, self.node)
