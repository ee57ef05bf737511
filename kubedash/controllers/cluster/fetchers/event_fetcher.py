"""Event fetcher for cluster controller - fetches event data from Kubernetes cluster."""

from __future__ import annotations

import logging

from kubedash.controllers.cluster.provider import ClusterDataProvider, RawObject

logger = logging.getLogger(__name__)


class EventFetcher:
    """Fetches event data from Kubernetes cluster."""

    def __init__(self, provider: ClusterDataProvider) -> None:
        """Initialize with the active cluster data provider.

        Args:
            provider: Provider used for every list call
        """
        self._provider = provider

    def fetch_events(self, namespace: str | None = None) -> list[RawObject]:
        """Fetch events for one namespace, or all namespaces when None.

        Failures propagate; the events screen shows them.
        """
        return self._provider.list("event", namespace)

    def fetch_events_for_node(self, node_name: str) -> list[RawObject]:
        """Fetch events whose involved object is ``node_name``.

        Used by the node detail panel; failures degrade to an empty list.
        """
        selector = f"involvedObject.kind=Node,involvedObject.name={node_name}"
        try:
            return self._provider.list("event", None, field_selector=selector)
        except Exception as e:
            logger.warning("Could not fetch events for node %s: %s", node_name, e)
            return []
