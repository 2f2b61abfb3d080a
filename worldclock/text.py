"""Text helpers: block-art composition, display width and centring."""

from __future__ import annotations

from wcwidth import wcwidth

from worldclock.glyphs import GLYPH_HEIGHT, glyph_rows

# ── Style markers ──────────────────────────────────────────────────────────

BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RESET = "\x1b[0m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"

STYLE_MARKERS: tuple[str, ...] = (BOLD, DIM, RESET, RED, GREEN, YELLOW, CYAN)


def strip_markers(text: str) -> str:
    """Remove the known style markers from *text*."""
    for marker in STYLE_MARKERS:
        text = text.replace(marker, "")
    return text


# ── Width & centring ───────────────────────────────────────────────────────


def display_width(text: str) -> int:
    """Terminal columns *text* occupies; wide characters and emoji count 2.

    Non-printable characters contribute nothing.
    """
    return sum(max(0, wcwidth(ch)) for ch in text)


def clip(text: str, width: int) -> str:
    """Longest prefix of *text* that fits in *width* columns."""
    used = 0
    for i, ch in enumerate(text):
        used += max(0, wcwidth(ch))
        if used > width:
            return text[:i]
    return text


def center(text: str, width: int) -> str:
    """Left-pad *text* so it sits centred in *width* columns.

    Odd leftover space ends up on the right. Text wider than *width* is
    returned unchanged, never truncated.
    """
    pad = max(0, (width - display_width(text)) // 2)
    return " " * pad + text


def center_stripped(text: str, width: int) -> str:
    """Like :func:`center`, but measures *text* without its style markers.

    The markers are kept in the returned string.
    """
    pad = max(0, (width - display_width(strip_markers(text))) // 2)
    return " " * pad + text


# ── Block art ──────────────────────────────────────────────────────────────


def compose_time_art(time_text: str) -> list[str]:
    """Render *time_text* as five lines of block glyphs.

    Glyphs are separated by one space column. Characters without a glyph are
    dropped without leaving a gap, so the glyphs after them shift left.
    """
    glyphs = [rows for rows in map(glyph_rows, time_text) if rows is not None]
    return [" ".join(rows[i] for rows in glyphs) for i in range(GLYPH_HEIGHT)]
