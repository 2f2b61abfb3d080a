"""Render the content of one clock cell.

Cells at least :data:`ART_MIN_HEIGHT` rows tall get the block-digit clock,
the full date and the business-hours line; smaller cells fall back to a
single plain-text time and a short date. Both modes pin the day-progress bar
to the last row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from worldclock.indicators import (
    business_icon,
    business_label,
    day_night_icon,
    progress_bar,
)
from worldclock.layout import Rect
from worldclock.ordering import TimezoneSlot
from worldclock.text import BOLD, RESET, center, center_stripped, compose_time_art

ART_MIN_HEIGHT = 8


@dataclass(frozen=True)
class CellFrame:
    """Everything drawn for one cell in one pass.

    ``body`` rows are written top-down from row 0; ``bottom`` goes on the
    last row of the cell regardless of how many body rows there are.
    """

    title: str
    height: int = 0
    body: list[str] = field(default_factory=lambda: list[str]())
    bottom: str | None = None
    art: bool = False

    def lines(self) -> list[str]:
        rows = (self.body + [""] * self.height)[: self.height]
        if self.bottom is not None and self.height:
            rows[-1] = self.bottom
        return rows


def format_clock(t: datetime) -> str:
    """``HH:MM AM`` on even seconds, ``HH MM AM`` on odd ones."""
    if t.second % 2 == 1:
        return t.strftime("%I %M %p")
    return t.strftime("%I:%M %p")


def full_date(t: datetime) -> str:
    return f"{t:%A, %B} {t.day}, {t.year}"


def short_date(t: datetime) -> str:
    return f"{t:%a, %b} {t.day}"


def cell_title(slot: TimezoneSlot, t: datetime | None, key: int | None = None) -> str:
    prefix = f"[{key}] " if key is not None else ""
    if t is None:
        return f" {prefix}{slot.name} (invalid) "
    return f" {prefix}{slot.name} {day_night_icon(t)} {business_icon(t)} "


def _art_body(t: datetime, width: int) -> list[str]:
    rows = [center(line, width) for line in compose_time_art(format_clock(t))]
    rows.append(center_stripped(f"{BOLD}{full_date(t)}{RESET}", width))
    rows.append(center(business_label(t), width))
    return rows


def _plain_body(t: datetime, width: int, room: int) -> list[str]:
    rows = [center(t.strftime("%I:%M:%S %p"), width)]
    if room > 1:
        rows.append(center(short_date(t), width))
    return rows


def render_cell(
    rect: Rect,
    slot: TimezoneSlot,
    instant: datetime | None,
    key: int | None = None,
) -> CellFrame:
    """Build the frame for *slot* at *instant* inside *rect*.

    *instant* must already be in the slot's zone; ``None`` marks a slot whose
    location could not be resolved, which gets a title and nothing else.
    *key* is the digit that swaps this cell into focus (secondary cells only).
    """
    title = cell_title(slot, instant, key)
    height, width = rect.height, rect.width
    if instant is None or rect.empty:
        return CellFrame(title=title, height=height)

    if height == 1:
        return CellFrame(title=title, height=1, body=_plain_body(instant, width, 1))

    # The last row belongs to the progress bar.
    room = height - 1
    art = height >= ART_MIN_HEIGHT
    body = _art_body(instant, width) if art else _plain_body(instant, width, room)
    top = max(0, (room - len(body)) // 2)
    return CellFrame(
        title=title,
        height=height,
        body=[""] * top + body[:room],
        bottom=progress_bar(instant, width),
        art=art,
    )
