"""Navigation and filter state driven by presentation intents."""

from __future__ import annotations

import logging

from kubedash.constants.defaults import ALL_NAMESPACES
from kubedash.models.state.screens import (
    HOME_SCREEN,
    ListScreen,
    PodLogs,
    ResourceDetail,
    Screen,
)

logger = logging.getLogger(__name__)


class AppState:
    """Current screen, namespace filter, search query and context.

    Detail and log screens remember the screen they were opened from so
    ``go_back`` can return to it.
    """

    def __init__(self) -> None:
        self.current_screen: Screen = HOME_SCREEN
        self.previous_screen: Screen | None = None
        self.namespace: str = ALL_NAMESPACES
        self.search_query: str = ""
        self.context: str = ""

    @property
    def namespace_filter(self) -> str | None:
        """Namespace to scope list calls to, None for all namespaces."""
        if not self.namespace or self.namespace == ALL_NAMESPACES:
            return None
        return self.namespace

    @property
    def can_go_back(self) -> bool:
        return self.previous_screen is not None and isinstance(
            self.current_screen, (ResourceDetail, PodLogs)
        )

    def navigate(self, screen: Screen) -> None:
        if isinstance(screen, (ResourceDetail, PodLogs)):
            # Stacked detail views go back to the list, not to each other.
            if isinstance(self.current_screen, ListScreen):
                self.previous_screen = self.current_screen
        else:
            self.previous_screen = None
        logger.debug("Navigate %s -> %s", self.current_screen, screen)
        self.current_screen = screen

    def go_back(self) -> bool:
        previous = self.previous_screen
        if previous is None or not self.can_go_back:
            return False
        self.current_screen = previous
        self.previous_screen = None
        return True

    def set_namespace(self, namespace: str | None) -> None:
        self.namespace = namespace or ALL_NAMESPACES

    def set_search_query(self, query: str) -> None:
        self.search_query = query or ""

    def set_context(self, context: str) -> None:
        """Record a context switch; the namespace filter resets to all."""
        self.context = context
        self.namespace = ALL_NAMESPACES
