from __future__ import annotations

from pypilens.render.context import PALETTES, Palette, RenderContext
from pypilens.render.dashboard import overview_stats, render_files, render_header, render_overview, render_releases
from pypilens.render.readme import NO_DESCRIPTION, render_blocks, render_description, render_readme, render_table

__all__ = [
    "NO_DESCRIPTION",
    "PALETTES",
    "Palette",
    "RenderContext",
    "overview_stats",
    "render_blocks",
    "render_description",
    "render_files",
    "render_header",
    "render_overview",
    "render_readme",
    "render_releases",
    "render_table",
]
