"""Selection reconciliation across refresh cycles.

A detail panel holds on to the record the user picked. Every successful poll
produces a fresh collection, so the selection is re-resolved by uid; when
the object is gone the selection is cleared instead of showing stale data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)


class HasUid(Protocol):
    """Anything carrying a stable Kubernetes uid."""

    @property
    def uid(self) -> str: ...


T = TypeVar("T", bound=HasUid)


def reconcile_selection(selected: T | None, items: Iterable[T]) -> T | None:
    """Re-find ``selected`` in ``items`` by uid.

    Returns:
        The record from ``items`` with the same uid (the fresh copy, not the
        old one), or None when nothing was selected or the object is gone.
    """
    if selected is None:
        return None
    for item in items:
        if item.uid == selected.uid:
            return item
    return None


class SelectionTracker(Generic[T]):
    """Holds the current selection for one list screen."""

    def __init__(self) -> None:
        self._selected: T | None = None

    @property
    def selected(self) -> T | None:
        return self._selected

    @property
    def selected_uid(self) -> str | None:
        return self._selected.uid if self._selected is not None else None

    def select(self, item: T | None) -> T | None:
        """Select ``item``; selecting the already selected uid toggles it off."""
        if item is not None and self._selected is not None and item.uid == self._selected.uid:
            self._selected = None
        else:
            self._selected = item
        return self._selected

    def clear(self) -> None:
        self._selected = None

    def reconcile(self, items: Iterable[T]) -> T | None:
        """Apply a freshly polled collection to the current selection."""
        previous_uid = self.selected_uid
        self._selected = reconcile_selection(self._selected, items)
        if previous_uid is not None and self._selected is None:
            logger.debug("Selection %s disappeared; clearing", previous_uid)
        return self._selected
