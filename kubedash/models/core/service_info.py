"""Service view model."""

from pydantic import Field

from kubedash.models.core._base import ViewRecord


class ServiceView(ViewRecord):
    """Service row."""

    uid: str
    name: str
    namespace: str = ""
    type: str = ""
    cluster_ip: str = ""
    ports: str = ""
    age: str = ""
    selector: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    def search_fields(self) -> tuple[str, ...]:
        return (self.name, self.namespace, self.type)
