"""Screen mixins."""

from kubedash.screens.mixins.polling_mixin import (
    ObservableSession,
    PollingMixin,
    PollStateChanged,
)

__all__ = [
    "ObservableSession",
    "PollStateChanged",
    "PollingMixin",
]
