"""Shared base for immutable view records."""

from pydantic import BaseModel, ConfigDict


class ViewRecord(BaseModel):
    """Immutable display record produced by aggregation.

    Each refresh builds new instances; nothing mutates them in place.
    """

    model_config = ConfigDict(frozen=True)
