"""Event view model."""

from kubedash.models.core._base import ViewRecord


class EventView(ViewRecord):
    """Event row; first/last seen are already formatted ages."""

    uid: str
    type: str = "Normal"
    reason: str = ""
    object_ref: str = "/"
    message: str = ""
    count: int = 1
    first_seen: str = ""
    last_seen: str = ""
    namespace: str = ""

    @property
    def is_warning(self) -> bool:
        return self.type == "Warning"

    def search_fields(self) -> tuple[str, ...]:
        return (self.reason, self.message, self.object_ref, self.type)
