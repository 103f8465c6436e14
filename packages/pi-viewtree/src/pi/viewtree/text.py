"""Terminal cell measurement for text drawn into a canvas.

Text is split into grapheme clusters; each cluster occupies zero, one or two
cells.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterator

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512

# Codepoints that force a cluster to emoji (double-width) presentation.
_VS16 = 0xFE0F
_ZWJ = 0x200D


def _is_wide_marker(cp: int) -> bool:
    return (
        cp in (_VS16, _ZWJ)
        or 0x1F3FB <= cp <= 0x1F3FF  # skin tone modifiers
        or 0x1F1E6 <= cp <= 0x1F1FF  # regional indicators
    )


def cell_width(g: str) -> int:
    """Number of cells a single grapheme cluster occupies: 0, 1 or 2."""
    if not g:
        return 0
    cached = _width_cache.get(g)
    if cached is not None:
        return cached

    first = g[0]
    cp = ord(first)
    if len(g) == 1:
        w = 0 if cp < 0x20 or 0x7F <= cp <= 0x9F else max(_wcwidth.wcwidth(g), 0)
    elif any(_is_wide_marker(ord(ch)) for ch in g) or cp >= 0x1F000 or 0x2600 <= cp <= 0x27BF:
        w = 2
    elif unicodedata.category(first).startswith("M") or unicodedata.category(first) == "Cf":
        w = 0
    else:
        w = max(_wcwidth.wcwidth(first), 0)

    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[g] = w
    return w


def cells(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(cluster, width)`` for every grapheme cluster in *text*.

    Tabs are expanded to three spaces.  Zero-width clusters are dropped.
    """
    for g in grapheme.graphemes(text.replace("\t", "   ")):
        w = cell_width(g)
        if w:
            yield g, w


def visible_width(text: str) -> int:
    """Total cells *text* occupies on a terminal."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(w for _, w in cells(text))


def truncate_to_width(text: str, width: int) -> str:
    """The longest prefix of *text*, cut at a cluster boundary, that fits in *width* cells."""
    out: list[str] = []
    used = 0
    for g, w in cells(text):
        if used + w > width:
            break
        out.append(g)
        used += w
    return "".join(out)
