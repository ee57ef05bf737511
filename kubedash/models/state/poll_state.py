"""Poll state published by polling sessions.

A tagged union of three frozen records::

    match state:
        case Loading():
            ...
        case Error(message=message):
            ...
        case Success(data=pods):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from kubedash.constants.enums import FetchState

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """No fetch has completed yet for this subscription."""

    @property
    def status(self) -> FetchState:
        return FetchState.LOADING


@dataclass(frozen=True)
class Error:
    """The first fetch failed (or the staleness limit was hit)."""

    message: str

    @property
    def status(self) -> FetchState:
        return FetchState.ERROR


@dataclass(frozen=True)
class Success(Generic[T]):
    """Latest successfully fetched data."""

    data: T

    @property
    def status(self) -> FetchState:
        return FetchState.SUCCESS


PollState = Union[Loading, Error, Success[T]]

LOADING = Loading()


def data_or_none(state: PollState[T]) -> T | None:
    """Return the payload of a Success state, otherwise None."""
    if isinstance(state, Success):
        return state.data
    return None


__all__ = [
    "LOADING",
    "Error",
    "Loading",
    "PollState",
    "Success",
    "data_or_none",
]
