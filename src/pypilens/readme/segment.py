"""Split normalized README text into alternating prose and pipe-table blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

_RE_SEPARATOR = re.compile(r"\|[|\-:\s]*")


@dataclass(frozen=True, slots=True)
class TextBlock:
    """A run of non-table lines, joined with newlines, whitespace untouched."""

    kind: ClassVar[str] = "text"
    content: str

    def lines(self) -> list[str]:
        return self.content.split("\n")


@dataclass(frozen=True, slots=True)
class TableBlock:
    """Trimmed pipe rows: header, separator, then data rows."""

    kind: ClassVar[str] = "table"
    rows: tuple[str, ...]


Block: TypeAlias = TextBlock | TableBlock


def is_table_row(line: str) -> bool:
    trimmed = line.strip()
    return trimmed.startswith("|") and trimmed.endswith("|")


def is_separator_line(line: str) -> bool:
    trimmed = line.strip()
    return bool(_RE_SEPARATOR.fullmatch(trimmed)) and "-" in trimmed


def segment(normalized: str) -> list[Block]:
    """
    Walk the text line by line and group pipe tables into their own blocks.

    A table opens on a candidate row whose next line is a separator and runs
    until the first line that is not a candidate row. That closing line is
    classified again from scratch, so it may open the next table directly.
    """
    lines = normalized.split("\n")
    blocks: list[Block] = []
    text: list[str] = []
    table: list[str] = []
    in_table = False

    i = 0
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()

        if in_table:
            if is_table_row(trimmed):
                table.append(trimmed)
                i += 1
                continue
            blocks.append(TableBlock(rows=tuple(table)))
            table = []
            in_table = False
            # Same line again, outside the table.
            continue

        next_line = lines[i + 1] if i + 1 < len(lines) else None
        if is_table_row(trimmed) and next_line is not None and is_separator_line(next_line):
            if text:
                blocks.append(TextBlock(content="\n".join(text)))
                text = []
            table.append(trimmed)
            in_table = True
        else:
            text.append(line)
        i += 1

    if in_table:
        blocks.append(TableBlock(rows=tuple(table)))
    elif text:
        blocks.append(TextBlock(content="\n".join(text)))
    return blocks


def parse_row(row: str) -> list[str]:
    """Split a pipe row into trimmed cells, dropping only the boundary artifacts."""
    cells = row.split("|")
    if cells and not cells[0].strip():
        cells = cells[1:]
    if cells and not cells[-1].strip():
        cells = cells[:-1]
    return [c.strip() for c in cells]


def split_table(block: TableBlock) -> tuple[list[str], list[list[str]]]:
    """Return (header, body) for a table block; the separator row is skipped."""
    if len(block.rows) < 2:
        return [], []
    return parse_row(block.rows[0]), [parse_row(r) for r in block.rows[2:]]
