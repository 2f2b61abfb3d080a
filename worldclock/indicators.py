"""Indicators derived from a local wall-clock time.

All functions take a ``datetime`` already converted to the zone being shown
and only look at its weekday, hour, minute and second.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from worldclock.text import GREEN, RED, RESET, YELLOW

SUN = "🌞"
MOON = "🌙"
OPEN = "🟢"
CLOSED = "🔴"

SECONDS_PER_DAY = 86_400

BAR_FILL = "█"
BAR_EMPTY = "░"

# Daylight and business windows, [start, end) in hours.
DAYTIME = (6, 18)
BUSINESS = (9, 17)


def day_night_icon(t: datetime) -> str:
    return SUN if DAYTIME[0] <= t.hour < DAYTIME[1] else MOON


def business_hours(t: datetime) -> bool:
    """True on Monday–Friday from 09:00 up to, not including, 17:00."""
    return t.weekday() < 5 and BUSINESS[0] <= t.hour < BUSINESS[1]


def business_icon(t: datetime) -> str:
    return OPEN if business_hours(t) else CLOSED


def business_label(t: datetime) -> str:
    if business_hours(t):
        return f"{OPEN} Business hours"
    return f"{CLOSED} After hours"


def band_color(hour: int) -> str:
    """Colour marker for the progress bar: green by day, yellow in the
    evening, red at night."""
    if 5 <= hour < 17:
        return GREEN
    if 17 <= hour < 21:
        return YELLOW
    return RED


@dataclass(frozen=True)
class DayProgress:
    elapsed: int
    color: str

    @property
    def fraction(self) -> float:
        return self.elapsed / SECONDS_PER_DAY

    @property
    def remaining(self) -> int:
        return SECONDS_PER_DAY - self.elapsed

    @property
    def remaining_text(self) -> str:
        hours, rest = divmod(self.remaining, 3600)
        return f"{hours}h {rest // 60}m left"


def day_progress(t: datetime) -> DayProgress:
    elapsed = t.hour * 3600 + t.minute * 60 + t.second
    return DayProgress(elapsed=elapsed, color=band_color(t.hour))


def progress_bar(t: datetime, total_width: int) -> str:
    """Render ``[████░░░░] 7h 12m left`` in at most *total_width* columns.

    The brackets, the gap column and the remaining-time text are reserved
    first; whatever is left is the track. When the text alone does not fit the
    track collapses to nothing and the line overflows instead.
    """
    progress = day_progress(t)
    suffix = f" {progress.remaining_text}"
    track = max(0, total_width - 2 - len(suffix))
    filled = int(track * progress.fraction)
    bar = f"{progress.color}{BAR_FILL * filled}{RESET}" if filled else ""
    return f"[{bar}{BAR_EMPTY * (track - filled)}]{suffix}"
