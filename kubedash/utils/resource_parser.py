"""Resource parsing utilities for CPU and memory values.

Provides functions to parse Kubernetes quantity strings into integer units:
- CPU: parsed to millicores (int)
- Memory: parsed to bytes (int)

Binary units are converted with integer arithmetic so capacity fractions
built from them stay exact.
"""

from __future__ import annotations

from typing import Any

# Module-level constants to avoid re-creating on every function call.
# Two-character suffixes must be checked before their one-character prefixes.
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ti", 1024**4),
    ("Gi", 1024**3),
    ("Mi", 1024**2),
    ("Ki", 1024),
    ("T", 1000**4),
    ("G", 1000**3),
    ("M", 1000**2),
    ("K", 1000),
    ("k", 1000),
)

_CPU_DIVISORS: tuple[tuple[str, int], ...] = (
    ("n", 1_000_000),
    ("u", 1_000),
    ("m", 1),
)

_KIB = 1024
_MIB = 1024**2
_GIB = 1024**3
_TIB = 1024**4


def _to_int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def parse_cpu_to_millis(cpu_str: Any) -> int:
    """Parse CPU string to millicores.

    Handles various CPU resource formats:
    - Nanocores: "1500000n" -> 1
    - Microcores: "500000u" -> 500
    - Millicores: "100m" -> 100
    - Cores: "2" -> 2000, "1.5" -> 1500

    Args:
        cpu_str: CPU value as string (e.g., "100m", "1.5", "500")

    Returns:
        CPU value in millicores, truncated toward zero. Returns 0 on parse
        error, blank input or "0".
    """
    if cpu_str is None:
        return 0
    cpu_str = str(cpu_str).strip()
    if not cpu_str or cpu_str == "0":
        return 0

    for suffix, divisor in _CPU_DIVISORS:
        if cpu_str.endswith(suffix):
            value = _to_int(cpu_str[: -len(suffix)])
            if value is None:
                return 0
            # Truncate toward zero, not toward negative infinity.
            return value // divisor if value >= 0 else -(-value // divisor)

    # Handle plain numbers (cores)
    try:
        return int(float(cpu_str) * 1000)
    except (ValueError, OverflowError):
        return 0


def parse_memory_to_bytes(memory_str: Any) -> int:
    """Convert memory string to bytes.

    Handles binary ("Ki", "Mi", "Gi", "Ti") and decimal ("K"/"k", "M", "G",
    "T") suffixes. Anything without a suffix is taken as bytes.

    Args:
        memory_str: Memory value as string (e.g., "512Mi", "1Gi", "1000")

    Returns:
        Memory value in bytes. Returns 0 on parse error, blank input or "0".
    """
    if memory_str is None:
        return 0
    memory_str = str(memory_str).strip()
    if not memory_str or memory_str == "0":
        return 0

    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if memory_str.endswith(suffix):
            value = _to_int(memory_str[: -len(suffix)])
            return value * mult if value is not None else 0

    # Handle plain bytes
    value = _to_int(memory_str)
    if value is not None:
        return value
    try:
        return int(float(memory_str))
    except (ValueError, OverflowError):
        return 0


def format_memory_size(num_bytes: int) -> str:
    """Format a byte count with the largest binary unit that fits."""
    if num_bytes >= _TIB:
        return f"{num_bytes / _TIB:.1f} TiB"
    if num_bytes >= _GIB:
        return f"{num_bytes / _GIB:.1f} GiB"
    if num_bytes >= _MIB:
        return f"{num_bytes / _MIB:.0f} MiB"
    if num_bytes >= _KIB:
        return f"{num_bytes / _KIB:.0f} KiB"
    return f"{num_bytes} B"


def format_cpu_cores(millis: int) -> str:
    """Format millicores as cores above one core, millicores below."""
    if millis >= 1000:
        return f"{millis / 1000:.1f} cores"
    return f"{millis}m"


def fraction(used: int, capacity: int) -> float:
    """Return used/capacity, or 0.0 when capacity is not positive."""
    if capacity <= 0:
        return 0.0
    return used / capacity
