"""Tests for resource parser utilities."""

from __future__ import annotations

from kubedash.utils.resource_parser import (
    format_cpu_cores,
    format_memory_size,
    fraction,
    parse_cpu_to_millis,
    parse_memory_to_bytes,
)


class TestParseCpuToMillis:
    """Tests for parse_cpu_to_millis function."""

    def test_parse_cpu_millicores(self) -> None:
        """Test parsing CPU in millicores."""
        assert parse_cpu_to_millis("100m") == 100
        assert parse_cpu_to_millis("1000m") == 1000

    def test_parse_cpu_cores(self) -> None:
        """Test parsing whole and fractional cores."""
        assert parse_cpu_to_millis("2") == 2000
        assert parse_cpu_to_millis("1.5") == 1500
        assert parse_cpu_to_millis("0.25") == 250

    def test_parse_cpu_micro_and_nano_cores(self) -> None:
        """Test parsing metrics-server style units."""
        assert parse_cpu_to_millis("500000u") == 500
        assert parse_cpu_to_millis("1500000n") == 1
        assert parse_cpu_to_millis("250000000n") == 250

    def test_parse_cpu_empty_and_zero(self) -> None:
        """Test blank, None and zero inputs."""
        assert parse_cpu_to_millis("") == 0
        assert parse_cpu_to_millis("0") == 0
        assert parse_cpu_to_millis(None) == 0

    def test_parse_cpu_invalid(self) -> None:
        """Test that unparseable values yield 0."""
        assert parse_cpu_to_millis("invalid") == 0
        assert parse_cpu_to_millis("abcm") == 0

    def test_parse_cpu_with_whitespace(self) -> None:
        """Test parsing CPU string with whitespace."""
        assert parse_cpu_to_millis(" 100m ") == 100


class TestParseMemoryToBytes:
    """Tests for parse_memory_to_bytes function."""

    def test_binary_suffixes(self) -> None:
        """Test Ki, Mi, Gi and Ti suffixes."""
        assert parse_memory_to_bytes("1Ki") == 1024
        assert parse_memory_to_bytes("512Mi") == 512 * 1024**2
        assert parse_memory_to_bytes("1Gi") == 1024**3
        assert parse_memory_to_bytes("2Ti") == 2 * 1024**4

    def test_decimal_suffixes(self) -> None:
        """Test K/k, M, G and T suffixes."""
        assert parse_memory_to_bytes("1k") == 1000
        assert parse_memory_to_bytes("1K") == 1000
        assert parse_memory_to_bytes("128M") == 128_000_000
        assert parse_memory_to_bytes("1G") == 1_000_000_000

    def test_plain_bytes(self) -> None:
        """Test values without a suffix."""
        assert parse_memory_to_bytes("128974848") == 128974848
        assert parse_memory_to_bytes("129e6") == 129_000_000

    def test_empty_and_invalid(self) -> None:
        """Test blank and invalid inputs yield 0."""
        assert parse_memory_to_bytes("") == 0
        assert parse_memory_to_bytes(None) == 0
        assert parse_memory_to_bytes("0") == 0
        assert parse_memory_to_bytes("lots") == 0
        assert parse_memory_to_bytes("1.5Gi") == 0


class TestFormatting:
    """Tests for human readable formatting helpers."""

    def test_format_memory_size(self) -> None:
        assert format_memory_size(100) == "100 B"
        assert format_memory_size(2048) == "2 KiB"
        assert format_memory_size(512 * 1024**2) == "512 MiB"
        assert format_memory_size(3 * 1024**3 // 2) == "1.5 GiB"
        assert format_memory_size(2 * 1024**4) == "2.0 TiB"

    def test_format_cpu_cores(self) -> None:
        assert format_cpu_cores(250) == "250m"
        assert format_cpu_cores(1000) == "1.0 cores"
        assert format_cpu_cores(1500) == "1.5 cores"

    def test_fraction(self) -> None:
        """Test fraction guards against empty capacity."""
        assert fraction(1, 4) == 0.25
        assert fraction(5, 0) == 0.0
        assert fraction(5, -1) == 0.0
