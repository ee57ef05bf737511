"""Polling sessions that keep screens fed with PollState updates."""

from kubedash.polling.keyed_session import KeyedPollingSession
from kubedash.polling.log_stream import LogStreamSession
from kubedash.polling.session import PollingSession

__all__ = ["KeyedPollingSession", "LogStreamSession", "PollingSession"]
