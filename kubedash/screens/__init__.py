"""KubeDash screen layer.

Domain Structure:
    - dashboard/ - Presenter owning the polling sessions and intents
    - mixins/    - Reusable screen mixins (session to message binding)

Example Usage:
    from kubedash.screens.dashboard import DashboardPresenter
    from kubedash.screens.mixins import PollingMixin, PollStateChanged
"""

from __future__ import annotations

from kubedash.screens.dashboard import DashboardPresenter
from kubedash.screens.mixins import PollingMixin, PollStateChanged

__all__ = [
    "DashboardPresenter",
    "PollStateChanged",
    "PollingMixin",
]
