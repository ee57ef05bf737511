"""Shared parser plumbing: an injectable clock for age columns."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from kubedash.utils.time_format import format_age

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseParser:
    """Base class for parsers that format ages relative to ``clock()``."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utc_now

    def age(self, timestamp: str | None) -> str:
        return format_age(timestamp, self._clock())
