from __future__ import annotations

from typing import Callable

from rich.console import Console

ProgressFn = Callable[[str], None]


def make_progress_printer(console: Console, *, prefix: str = "pypilens") -> ProgressFn:
    """
    Status lines ("fetching requests") on the given console, dimmed.

    Silent unless the console is a terminal, so piped dashboard output stays clean.
    """

    def _progress(message: str) -> None:
        msg = (message or "").strip()
        if not msg or not console.is_terminal:
            return
        console.print(f"{prefix}: {msg}", style="dim", markup=False, highlight=False)

    return _progress
