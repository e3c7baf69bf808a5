from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console, RenderableType

from pypilens.config import AppConfig, load_config, resolve_app_dir
from pypilens.readme import TableBlock, normalize, segment
from pypilens.registry import PackageData, PackageNotFoundError, RegistryClient, RegistryError
from pypilens.registry.models import DownloadStats
from pypilens.render import (
    RenderContext,
    render_description,
    render_header,
    render_overview,
    render_readme,
    render_releases,
)
from pypilens.utils.progress import ProgressFn, make_progress_printer

app = typer.Typer(
    add_completion=False,
    help="Explore PyPI packages from the terminal: metadata, releases and README.",
)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = logging.getLogger(__name__)


class Tab(str, Enum):
    OVERVIEW = "overview"
    README = "readme"
    RELEASES = "releases"


class ThemeName(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@app.callback()
def _global_options(
    ctx: typer.Context,
    app_dir: Annotated[
        Path | None,
        typer.Option("--app-dir", help="Config directory (default: ~/.config/pypilens)."),
    ] = None,
    theme: Annotated[
        ThemeName | None,
        typer.Option("--theme", help="Color palette (default from config, else light)."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    resolved_app_dir = resolve_app_dir(app_dir)
    config = load_config(app_dir=resolved_app_dir)
    ctx.obj = {
        "app_dir": resolved_app_dir,
        "config": config,
        "render": RenderContext(
            theme=theme.value if theme is not None else config.display.theme,
            width=config.display.width,
        ),
    }
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO; only show that under --verbose.
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def _open_client(config: AppConfig) -> RegistryClient:
    return RegistryClient.from_config(config.registry)


def _print(renderables: list[RenderableType], render_ctx: RenderContext) -> None:
    for r in renderables:
        console.print(r, width=render_ctx.width)


def _fetch(
    ctx: typer.Context,
    name: str,
    *,
    with_stats: bool = False,
    progress: ProgressFn | None = None,
) -> tuple[PackageData, DownloadStats | None]:
    config: AppConfig = ctx.obj["config"]
    package = (name or "").strip()
    if not package:
        raise typer.BadParameter("package name cannot be empty")

    progress = progress or make_progress_printer(err_console)
    stats: DownloadStats | None = None
    try:
        with _open_client(config) as client:
            progress(f"fetching {package}")
            data = client.fetch_package(package)
            if with_stats and config.registry.fetch_stats:
                progress(f"fetching download stats for {package}")
                stats = client.fetch_download_stats(package)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    except PackageNotFoundError as e:
        err_console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(code=1) from e
    except RegistryError as e:
        err_console.print(f"(error) {e}", markup=False, highlight=False)
        raise typer.Exit(code=1) from e
    return data, stats


@app.command()
def show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Package name on PyPI.")],
    tab: Annotated[Tab, typer.Option("--tab", "-t", help="Which view to show.")] = Tab.OVERVIEW,
) -> None:
    """Show the dashboard for a package (overview, readme or releases)."""
    render_ctx: RenderContext = ctx.obj["render"]
    config: AppConfig = ctx.obj["config"]
    data, stats = _fetch(ctx, name, with_stats=tab == Tab.OVERVIEW)

    if tab == Tab.OVERVIEW:
        _print(render_overview(data, stats, render_ctx), render_ctx)
    elif tab == Tab.README:
        _print([render_header(data, render_ctx), *render_readme(data.info, render_ctx)], render_ctx)
    else:
        limit = config.display.releases_limit or None
        _print(render_releases(data, render_ctx, limit=limit), render_ctx)


@app.command()
def readme(
    ctx: typer.Context,
    name: Annotated[str | None, typer.Argument(help="Package name on PyPI.")] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Render a local README instead of fetching one.", dir_okay=False),
    ] = None,
    content_type: Annotated[
        str | None,
        typer.Option("--content-type", help="Content type of --file (text/markdown or text/x-rst)."),
    ] = None,
) -> None:
    """Render a package README."""
    render_ctx: RenderContext = ctx.obj["render"]
    if file is not None:
        if not file.exists():
            raise typer.BadParameter(f"File not found: {file}")
        text = file.read_text(encoding="utf-8", errors="replace")
        ct = content_type or ("text/x-rst" if file.suffix.lower() == ".rst" else "text/markdown")
        _print(render_description(text, render_ctx, content_type=ct), render_ctx)
        return
    if not name:
        raise typer.BadParameter("Provide a package name or --file.")
    data, _ = _fetch(ctx, name)
    _print(render_readme(data.info, render_ctx), render_ctx)


@app.command()
def releases(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Package name on PyPI.")],
    files: Annotated[bool, typer.Option("--files", help="Also list the files of each release.")] = False,
    limit: Annotated[int, typer.Option("--limit", help="Max releases to show (0 = all).")] = 0,
) -> None:
    """List releases newest first."""
    render_ctx: RenderContext = ctx.obj["render"]
    config: AppConfig = ctx.obj["config"]
    data, _ = _fetch(ctx, name)
    _print(
        render_releases(data, render_ctx, show_files=files, limit=limit or config.display.releases_limit or None),
        render_ctx,
    )


@app.command()
def info(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Package name on PyPI.")],
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
) -> None:
    """Show package metadata."""
    render_ctx: RenderContext = ctx.obj["render"]
    data, _ = _fetch(ctx, name)
    if not as_json:
        _print([render_header(data, render_ctx)], render_ctx)
        return

    meta: dict[str, Any] = {
        "name": data.info.name,
        "version": data.info.version,
        "summary": data.info.summary,
        "requires_python": data.info.requires_python,
        "license": data.info.license,
        "author": data.info.author,
        "home_page": data.info.home_page,
        "project_urls": data.info.project_urls,
        "requires_dist": list(data.info.requires_dist),
        "description_content_type": data.info.description_content_type,
        "release_count": len(data.release_timeline()),
        "latest_size": data.latest_size(),
    }
    console.print_json(data=meta)


@app.command()
def install(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Package name on PyPI.")],
) -> None:
    """Print the pip install command for a package."""
    data, _ = _fetch(ctx, name)
    console.print(data.info.install_command, markup=False, highlight=False)


@app.command()
def blocks(
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="README to segment (default: stdin).", dir_okay=False),
    ] = None,
) -> None:
    """Debug view: list the text/table blocks a README is split into."""
    if file is not None:
        if not file.exists():
            raise typer.BadParameter(f"File not found: {file}")
        text = file.read_text(encoding="utf-8", errors="replace")
    else:
        text = sys.stdin.read()

    for idx, block in enumerate(segment(normalize(text)), start=1):
        if isinstance(block, TableBlock):
            console.print(f"[{idx}] table rows={len(block.rows)}", markup=False, highlight=False)
        else:
            console.print(f"[{idx}] text lines={len(block.lines())}", markup=False, highlight=False)
