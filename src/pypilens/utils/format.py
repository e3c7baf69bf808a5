from __future__ import annotations

from datetime import datetime, timezone

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: int | None, decimals: int = 2) -> str:
    """Human-readable 1024-based size, e.g. 1536 -> "1.5 KB"."""
    if not size or size < 0:
        return "0 Bytes"
    value = float(size)
    i = 0
    while value >= 1024 and i < len(_SIZE_UNITS) - 1:
        value /= 1024
        i += 1
    text = f"{value:.{max(0, decimals)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[i]}"


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    # Registry timestamps without an offset are UTC.
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def format_date(value: str | datetime | None) -> str:
    """Short US-style date ("Jan 5, 2024"); "N/A" when missing or unparseable."""
    dt = parse_timestamp(value)
    if dt is None:
        return "N/A"
    return f"{dt:%b} {dt.day}, {dt.year}"


def short_digest(digest: str | None, n: int = 12) -> str:
    if not digest:
        return ""
    return f"{digest[:n]}..."
