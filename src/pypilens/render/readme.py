"""Render README descriptions: prose through rich Markdown, pipe tables through rich Table."""

from __future__ import annotations

import re

from rich import box
from rich.console import RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pypilens.readme import TableBlock, TextBlock, normalize, segment, split_table
from pypilens.registry.models import PackageInfo
from pypilens.render.context import RenderContext

NO_DESCRIPTION = "No description available for this package."

_RE_INLINE_MARKUP = re.compile(r"[*_`]|!?\[[^\]]*\]\(")


def _cell(value: str, ctx: RenderContext) -> RenderableType:
    if _RE_INLINE_MARKUP.search(value):
        return Markdown(value, code_theme=ctx.palette.code_theme)
    return Text(value)


def render_table(block: TableBlock, ctx: RenderContext) -> Table | None:
    """
    Build a rich Table from a pipe-table block.

    Returns None when the block has no header/separator pair. Body rows are
    padded with empty cells or cut to the header width.
    """
    header, body = split_table(block)
    if not header:
        return None

    palette = ctx.palette
    table = Table(box=box.ROUNDED, border_style=palette.border, header_style=palette.accent, show_lines=False)
    for name in header:
        table.add_column(name.upper())
    width = len(header)
    for row in body:
        cells = (row + [""] * width)[:width]
        table.add_row(*(_cell(c, ctx) for c in cells))
    return table


def render_blocks(text: str, ctx: RenderContext) -> list[RenderableType]:
    renderables: list[RenderableType] = []
    for block in segment(normalize(text)):
        if isinstance(block, TextBlock):
            if block.content.strip():
                renderables.append(Markdown(block.content, code_theme=ctx.palette.code_theme))
        else:
            table = render_table(block, ctx)
            if table is not None:
                renderables.append(table)
    return renderables


def render_description(
    description: str | None,
    ctx: RenderContext,
    *,
    content_type: str | None = None,
) -> list[RenderableType]:
    if not description or not description.strip():
        return [Text(NO_DESCRIPTION, style=ctx.palette.muted)]

    if (content_type or "").lower().startswith("text/x-rst"):
        # reStructuredText is shown raw; the markdown pipeline would mangle it.
        return [
            Text("reStructuredText content is displayed as raw text.", style=ctx.palette.warning),
            Panel(Text(description), border_style=ctx.palette.border),
        ]

    return render_blocks(description, ctx)


def render_readme(info: PackageInfo, ctx: RenderContext) -> list[RenderableType]:
    return render_description(info.description, ctx, content_type=info.description_content_type)
