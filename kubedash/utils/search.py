"""Case-insensitive search filtering over view records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar


class Searchable(Protocol):
    """View records that expose the fields a search query matches against."""

    def search_fields(self) -> Sequence[str | None]: ...


S = TypeVar("S", bound=Searchable)


def matches_query(item: Searchable, query: str) -> bool:
    """Return True when any search field contains ``query`` (ignoring case)."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(field and needle in field.lower() for field in item.search_fields())


def filter_by_query(items: Iterable[S], query: str) -> list[S]:
    """Keep items matching ``query``; a blank query keeps everything."""
    return [item for item in items if matches_query(item, query)]
