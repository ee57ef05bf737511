"""Age formatting for Kubernetes creation timestamps."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timezone

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600
_SECONDS_PER_DAY = 86400


def parse_timestamp(timestamp: str) -> datetime | None:
    """Parse kubernetes timestamp strings into aware datetimes."""
    if not isinstance(timestamp, str) or not timestamp.strip():
        return None
    parsed: datetime | None = None
    with suppress(ValueError, TypeError):
        parsed = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    if parsed is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(timestamp: str | None, now: datetime | None = None) -> str:
    """Format the time elapsed since ``timestamp`` as a coarse duration.

    The largest applicable unit pair is used: ``1y2mo``, ``3mo4d``,
    ``2d5h``, ``3h12m``, ``7m`` or ``42s``.

    Args:
        timestamp: RFC 3339 timestamp from object metadata.
        now: Reference time; defaults to the current UTC time.

    Returns:
        The duration string, ``""`` when the timestamp is missing, or the
        raw timestamp when it cannot be parsed.
    """
    if timestamp is None or not str(timestamp).strip():
        return ""

    created = parse_timestamp(str(timestamp))
    if created is None:
        return str(timestamp)

    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    # Clock skew can put creation in the future.
    seconds = max(0, int((reference - created).total_seconds()))
    days = seconds // _SECONDS_PER_DAY
    hours = seconds // _SECONDS_PER_HOUR
    minutes = seconds // _SECONDS_PER_MINUTE

    if days > 365:
        return f"{days // 365}y{(days % 365) // 30}mo"
    if days > 30:
        return f"{days // 30}mo{days % 30}d"
    if days > 0:
        return f"{days}d{hours % 24}h"
    if hours > 0:
        return f"{hours}h{minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"
