"""Generic resource view model shared by the simpler kinds."""

from pydantic import Field

from kubedash.models.core._base import ViewRecord


class GenericResourceView(ViewRecord):
    """Row for any kind rendered by the generic resource screen.

    ``extra_columns`` is an ordered mapping of kind-specific summary fields,
    e.g. ``{"Completions": "1/1", "Status": "Complete"}`` for a Job.
    """

    uid: str
    name: str
    namespace: str | None = None
    status: str | None = None
    age: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    extra_columns: dict[str, str] = Field(default_factory=dict)

    def search_fields(self) -> tuple[str | None, ...]:
        return (self.name, self.namespace, self.status)
