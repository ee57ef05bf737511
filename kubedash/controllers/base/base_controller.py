"""Base controller with async worker-friendly patterns.

Provider calls are blocking, so every controller dispatches them to a
worker thread and awaits the result on the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ActionResult:
    """Result wrapper for one-shot user actions (connect, delete)."""

    success: bool
    data: Any | None = None
    error: str | None = None
    duration_ms: float = 0.0

    @classmethod
    def ok(cls, data: Any | None = None, *, started: float | None = None) -> ActionResult:
        return cls(True, data=data, duration_ms=_elapsed_ms(started))

    @classmethod
    def failed(cls, error: str, *, started: float | None = None) -> ActionResult:
        return cls(False, error=error, duration_ms=_elapsed_ms(started))


def _elapsed_ms(started: float | None) -> float:
    if started is None:
        return 0.0
    return (time.monotonic() - started) * 1000


class BaseController(ABC):
    """Base controller class with worker-friendly patterns.

    Subclasses should implement the abstract methods to provide
    specific data fetching functionality.
    """

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking callable in a worker thread."""
        return await asyncio.to_thread(func, *args, **kwargs)

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...
