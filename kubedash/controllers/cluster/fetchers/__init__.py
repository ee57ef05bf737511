"""Fetchers for cluster data - thin wrappers over the cluster data provider."""

from kubedash.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kubedash.controllers.cluster.fetchers.pod_fetcher import PodFetcher
from kubedash.controllers.cluster.fetchers.usage_fetcher import UsageFetcher

__all__ = ["EventFetcher", "PodFetcher", "UsageFetcher"]
