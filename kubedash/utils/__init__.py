"""Utility functions and classes for the dashboard core."""

from kubedash.utils.resource_parser import (
    format_cpu_cores,
    format_memory_size,
    parse_cpu_to_millis,
    parse_memory_to_bytes,
)
from kubedash.utils.search import filter_by_query, matches_query
from kubedash.utils.selection import SelectionTracker, reconcile_selection
from kubedash.utils.time_format import format_age

__all__ = [
    # Selection
    "SelectionTracker",
    "filter_by_query",
    # Formatting
    "format_age",
    "format_cpu_cores",
    "format_memory_size",
    # Search
    "matches_query",
    # Quantities
    "parse_cpu_to_millis",
    "parse_memory_to_bytes",
    "reconcile_selection",
]
