"""Rewrite the HTML commonly embedded in package READMEs into Markdown."""

from __future__ import annotations

import re

_FLAGS = re.IGNORECASE | re.DOTALL

_RE_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_RE_IMG = re.compile(r"<img\s+(?:[^>]*?\s)?src=[\"']([^\"']+)[\"'][^>]*>", re.IGNORECASE)
_RE_IMG_ALT = re.compile(r"(?:^|\s)alt=[\"']([^\"']+)[\"']", re.IGNORECASE)
_RE_LINK = re.compile(r"<a\s+(?:[^>]*?\s)?href=[\"']([^\"']+)[\"'][^>]*>(.*?)</a\s*>", _FLAGS)
_RE_HEADING = re.compile(r"<h([1-6])(?:\s[^>]*)?>(.*?)</h\1\s*>", _FLAGS)
_RE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_RE_P_OPEN = re.compile(r"<p(?:\s[^>]*)?>", re.IGNORECASE)
_RE_P_CLOSE = re.compile(r"</p\s*>", re.IGNORECASE)
_RE_WRAPPER = re.compile(r"</?(?:div|span)(?:\s[^>]*)?>", re.IGNORECASE)
_RE_BLANK_RUN = re.compile(r"\n{3,}")


def _img_to_markdown(match: re.Match[str]) -> str:
    alt = _RE_IMG_ALT.search(match.group(0))
    return f"![{alt.group(1) if alt else 'Image'}]({match.group(1)})"


def _heading_to_markdown(match: re.Match[str]) -> str:
    return f"{'#' * int(match.group(1))} {match.group(2)}\n\n"


def normalize(raw: str | None) -> str:
    """
    Best-effort HTML → Markdown rewrite for README text.

    Pure textual substitution, applied in a fixed order: comments, images,
    links, headings, breaks/paragraphs, div/span wrappers, then blank-line
    collapse. Anything the patterns don't match passes through unchanged.
    """
    if not raw:
        return ""
    text = raw.replace("\r\n", "\n").replace("\r", "\n")

    text = _RE_COMMENT.sub("", text)
    # Images before links so linked logos become [![alt](src)](href).
    text = _RE_IMG.sub(_img_to_markdown, text)
    text = _RE_LINK.sub(lambda m: f"[{m.group(2)}]({m.group(1)})", text)
    text = _RE_HEADING.sub(_heading_to_markdown, text)

    text = _RE_BREAK.sub("\n", text)
    text = _RE_P_OPEN.sub("\n\n", text)
    text = _RE_P_CLOSE.sub("\n\n", text)
    text = _RE_WRAPPER.sub("", text)

    return _RE_BLANK_RUN.sub("\n\n", text)
