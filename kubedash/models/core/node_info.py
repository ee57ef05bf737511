"""Node view model."""

from pydantic import Field

from kubedash.models.core._base import ViewRecord


class NodeView(ViewRecord):
    """Node row; cpu/memory/pods are the raw allocatable quantities."""

    uid: str
    name: str
    status: str = "NotReady"
    roles: str = "<none>"
    version: str = ""
    os: str = ""
    arch: str = ""
    container_runtime: str = ""
    cpu: str = ""
    memory: str = ""
    pods: str = ""
    age: str = ""
    labels: dict[str, str] = Field(default_factory=dict)

    @property
    def pods_capacity(self) -> int:
        """Allocatable pod slots, 0 when the quantity is missing or odd."""
        try:
            return int(self.pods)
        except ValueError:
            return 0

    def search_fields(self) -> tuple[str, ...]:
        return (self.name, self.roles, self.status)
