from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Palette:
    accent: str
    muted: str
    warning: str
    wheel: str
    sdist: str
    border: str
    code_theme: str


PALETTES: dict[str, Palette] = {
    "light": Palette(
        accent="bold blue",
        muted="grey50",
        warning="dark_orange",
        wheel="blue",
        sdist="dark_orange",
        border="grey70",
        code_theme="default",
    ),
    "dark": Palette(
        accent="bold medium_purple1",
        muted="grey62",
        warning="orange1",
        wheel="sky_blue1",
        sdist="gold1",
        border="grey35",
        code_theme="monokai",
    ),
}


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Display settings handed to every renderer; nothing is read from globals."""

    theme: str = "light"
    width: int | None = None

    @property
    def palette(self) -> Palette:
        return PALETTES.get(self.theme, PALETTES["light"])
