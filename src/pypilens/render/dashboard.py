from __future__ import annotations

from rich import box
from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pypilens.registry.models import DownloadStats, PackageData, Release
from pypilens.render.context import RenderContext
from pypilens.utils.format import format_bytes, format_date, short_digest


def _stat_card(label: str, value: str, ctx: RenderContext, sub_value: str | None = None) -> Panel:
    body = Text()
    body.append(f"{label}\n", style=ctx.palette.muted)
    body.append(value, style="bold")
    if sub_value:
        body.append(f"\n{sub_value}", style=ctx.palette.muted)
    return Panel(body, border_style=ctx.palette.border, expand=True)


def render_header(data: PackageData, ctx: RenderContext) -> Panel:
    info = data.info
    palette = ctx.palette

    title = Text()
    title.append(info.name or "?", style=palette.accent)
    if info.version:
        title.append(f"  v{info.version}", style=palette.muted)

    lines: list[RenderableType] = [
        title,
        Text(info.summary or "No description provided."),
        Text(f"$ {info.install_command}", style="bold"),
    ]
    links = Text()
    if info.home_page:
        links.append("Homepage: ", style=palette.muted)
        links.append(info.home_page, style=f"link {info.home_page}")
    if info.source_url:
        if links:
            links.append("  ")
        links.append("Source: ", style=palette.muted)
        links.append(info.source_url, style=f"link {info.source_url}")
    if links:
        lines.append(links)
    return Panel(Group(*lines), border_style=palette.border, box=box.ROUNDED)


def overview_stats(data: PackageData, stats: DownloadStats | None) -> list[tuple[str, str, str | None]]:
    """(label, value, sub-value) rows for the overview cards."""
    downloads = f"{stats.total():,}" if stats is not None else "N/A"
    return [
        ("Total Releases", str(len(data.release_timeline())), None),
        ("Last Month Downloads", downloads, "via PyPI Stats" if stats is not None else "Data Unavailable"),
        ("Latest Size", format_bytes(data.latest_size()), None),
        ("Python Requires", data.info.requires_python or "*", None),
    ]


def render_overview(data: PackageData, stats: DownloadStats | None, ctx: RenderContext) -> list[RenderableType]:
    cards = [_stat_card(label, value, ctx, sub) for label, value, sub in overview_stats(data, stats)]
    return [render_header(data, ctx), Columns(cards, equal=True, expand=True)]


def _badges(release: Release, ctx: RenderContext) -> Text:
    badges = Text()
    if release.has_wheel:
        badges.append("WHEEL", style=f"bold {ctx.palette.wheel}")
    if release.has_sdist:
        if badges:
            badges.append(" ")
        badges.append("SOURCE", style=f"bold {ctx.palette.sdist}")
    return badges


def render_files(release: Release, ctx: RenderContext) -> Table:
    palette = ctx.palette
    table = Table(title=f"{release.version} files", box=box.SIMPLE, header_style=palette.muted)
    table.add_column("filename")
    table.add_column("type", no_wrap=True)
    table.add_column("size", justify="right", no_wrap=True)
    table.add_column("uploaded", no_wrap=True)
    table.add_column("download")
    for f in release.sorted_files():
        name = Text(f.filename)
        if f.sha256:
            name.append(f"\nSHA256: {short_digest(f.sha256)}", style=palette.muted)
        table.add_row(
            name,
            Text(f.kind_label, style=palette.wheel if f.is_wheel else palette.sdist),
            format_bytes(f.size),
            format_date(f.upload_time),
            Text(f.url, style=f"link {f.url}") if f.url else "",
        )
    return table


def render_releases(
    data: PackageData,
    ctx: RenderContext,
    *,
    show_files: bool = False,
    limit: int | None = None,
) -> list[RenderableType]:
    releases = data.releases_newest_first()
    if limit:
        releases = releases[:limit]

    table = Table(title=f"Releases ({len(data.releases)})", box=box.ROUNDED, border_style=ctx.palette.border)
    table.add_column("version", style=ctx.palette.accent, no_wrap=True)
    table.add_column("files", justify="right", no_wrap=True)
    table.add_column("released", no_wrap=True)
    table.add_column("type", no_wrap=True)
    for release in releases:
        table.add_row(
            release.version,
            str(len(release.files)),
            format_date(release.upload_time),
            _badges(release, ctx),
        )

    out: list[RenderableType] = [table]
    if show_files:
        out.extend(render_files(r, ctx) for r in releases if r.files)
    return out
