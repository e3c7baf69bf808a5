from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pypilens.utils.format import format_bytes, format_date, parse_timestamp, short_digest


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (None, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024 * 3.25, "3.25 MB"),
        (1024**5 * 2, "2048 TB"),
    ],
)
def test_format_bytes(size, expected: str) -> None:
    assert format_bytes(size) == expected


def test_format_bytes_decimals() -> None:
    assert format_bytes(1500, decimals=0) == "1 KB"
    assert format_bytes(1234567, decimals=1) == "1.2 MB"


def test_parse_timestamp_assumes_utc() -> None:
    assert parse_timestamp("2024-01-05T09:30:00") == datetime(2024, 1, 5, 9, 30, tzinfo=timezone.utc)
    assert parse_timestamp("2024-01-05T09:30:00.123Z").tzinfo is not None
    assert parse_timestamp("not a date") is None
    assert parse_timestamp("") is None


def test_format_date() -> None:
    assert format_date("2024-01-05T09:30:00") == "Jan 5, 2024"
    assert format_date(datetime(2023, 12, 25)) == "Dec 25, 2023"
    assert format_date(None) == "N/A"


def test_short_digest() -> None:
    assert short_digest("abcdef0123456789") == "abcdef012345..."
    assert short_digest(None) == ""
