"""Event parser for cluster controller."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from kubedash.controllers.cluster.parsers.base_parser import BaseParser
from kubedash.models.core.event_info import EventView
from kubedash.utils.time_format import parse_timestamp

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_at(event: dict[str, Any]) -> datetime:
    return parse_timestamp(event.get("metadata", {}).get("creationTimestamp")) or _EPOCH


class EventParser(BaseParser):
    """Parses events into EventView records, newest first."""

    def parse_event(self, event: dict[str, Any]) -> EventView:
        metadata = event.get("metadata", {})
        involved = event.get("involvedObject") or {}
        created = metadata.get("creationTimestamp")
        return EventView(
            uid=metadata.get("uid") or "",
            type=event.get("type") or "Normal",
            reason=event.get("reason") or "",
            object_ref=f"{involved.get('kind') or ''}/{involved.get('name') or ''}",
            message=event.get("message") or "",
            count=int(event.get("count") or 1),
            first_seen=self.age(event.get("firstTimestamp") or created),
            last_seen=self.age(event.get("lastTimestamp") or created),
            namespace=metadata.get("namespace") or "",
        )

    def parse_events(self, events: list[dict[str, Any]]) -> list[EventView]:
        ordered = sorted(events, key=_created_at, reverse=True)
        return [self.parse_event(event) for event in ordered]

    @staticmethod
    def filter_for_node(events: list[dict[str, Any]], node_name: str) -> list[dict[str, Any]]:
        """Keep events whose involved object is the given node."""
        return [
            event
            for event in events
            if (event.get("involvedObject") or {}).get("kind") == "Node"
            and (event.get("involvedObject") or {}).get("name") == node_name
        ]
