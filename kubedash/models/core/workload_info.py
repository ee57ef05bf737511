"""Deployment view model."""

from pydantic import Field

from kubedash.models.core._base import ViewRecord


class DeploymentView(ViewRecord):
    """Deployment row with replica counters."""

    uid: str
    name: str
    namespace: str = ""
    ready: str = "0/0"
    up_to_date: int = 0
    available: int = 0
    age: str = ""
    strategy: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    conditions: list[str] = Field(default_factory=list)

    def search_fields(self) -> tuple[str, ...]:
        return (self.name, self.namespace)
