from __future__ import annotations

from pypilens.readme.normalize import normalize
from pypilens.readme.segment import (
    Block,
    TableBlock,
    TextBlock,
    is_separator_line,
    is_table_row,
    parse_row,
    segment,
    split_table,
)

__all__ = [
    "Block",
    "TableBlock",
    "TextBlock",
    "is_separator_line",
    "is_table_row",
    "normalize",
    "parse_row",
    "segment",
    "split_table",
]
