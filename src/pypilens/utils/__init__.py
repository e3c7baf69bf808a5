from __future__ import annotations

from pypilens.utils.format import format_bytes, format_date, parse_timestamp, short_digest
from pypilens.utils.progress import ProgressFn, make_progress_printer

__all__ = [
    "ProgressFn",
    "format_bytes",
    "format_date",
    "make_progress_printer",
    "parse_timestamp",
    "short_digest",
]
